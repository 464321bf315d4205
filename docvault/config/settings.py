from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"

    keypair_path: str = ".docvault-keys.json"
    metadata_dir: str = "."

    storage_provider: str = "local"
    storage_files_root: str = "./storage"
    storage_gateway_url: str = "http://localhost:8080/ipfs"

    # random bytes mixed into the content hash to form a document id
    document_id_entropy_bytes: int = 16
