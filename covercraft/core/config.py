from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./covercraft.db"

    # Gemini
    GOOGLE_API_KEY: str = ""
    GENERATION_MODEL: str = "gemini-2.5-flash"

    # Bearer tokens are issued by the identity provider and signed with this secret
    SUPABASE_JWT_SECRET: str = ""
    JWT_AUDIENCE: str = "authenticated"
    JWT_ALGORITHMS: list[str] = ["HS256"]

    # Object storage for uploaded resumes
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    RESUME_FOLDER: str = "resumes"
    SIGNED_URL_TTL_SECONDS: int = 3600
    MAX_RESUME_BYTES: int = 5 * 1024 * 1024

    CORS_ORIGINS: list[str] = ["*"]
    DEFAULT_PAGE_LIMIT: int = 10

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
