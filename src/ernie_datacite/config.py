from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Exporter/importer configuration"""

    DEFAULT_PUBLISHER_NAME: str = "GFZ Helmholtz Centre for Geosciences"
    DEFAULT_PUBLISHER_IDENTIFIER: str = "https://ror.org/04z8jg394"
    DEFAULT_PUBLISHER_IDENTIFIER_SCHEME: str = "ROR"
    DEFAULT_PUBLISHER_SCHEME_URI: str = "https://ror.org/"

    MSL_LABORATORIES_URL: str = (
        "https://raw.githubusercontent.com/UtrechtUniversity/msl_vocabularies"
        "/main/vocabularies/labs/laboratories.json"
    )
    MSL_REQUEST_TIMEOUT: float = 10.0
    MSL_CACHE_TTL: int = 86400

    MAX_UPLOAD_SIZE: int = 4 * 1024 * 1024

    class Config:
        env_file = ".env"


settings = Settings()
