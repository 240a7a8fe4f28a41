#Pydantic class designed specifically for configuration management.
#automatically reads values from Environment variables
from pydantic_settings import BaseSettings
from typing import List, Optional

#all configuration values needed
class Settings(BaseSettings):
    database_url: str = "sqlite:///./student_clinic.db"
    #secret shared with the hosted identity provider that signs access tokens
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    #empty string disables the audience check
    jwt_audience: Optional[str] = "authenticated"
    access_token_expire_minutes: int = 60
    cors_origins: List[str] = ["http://localhost:3000"]

    #record numbers are derived as "<institution id> -- <sequence>" when enabled
    record_number_auto_sequence: bool = True
    top_illnesses_limit: int = 10
    clinic_name: str = "Student Health Clinic"
    log_level: str = "INFO"

   #Tells Pydantic to load variables from a .env file
    class Config:
        env_file = ".env"

settings = Settings()


