#domain operations, one module per entity kind
from . import documents, kv_store, medical_records, medicine, sick_leave, statistics, students

__all__ = ["documents", "kv_store", "medical_records", "medicine", "sick_leave", "statistics", "students"]
