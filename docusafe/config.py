# docusafe/config.py
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./docusafe.db"  # Default if not in .env

    # Storage Paths
    STORAGE_PATH: Path = Path("storage")
    IMAGES_PATH: Path | None = None  # Will be set based on STORAGE_PATH
    LOGS_PATH: Path | None = None  # Will be set based on STORAGE_PATH

    # Scanning
    JPEG_QUALITY: float = 0.65  # 0..1 compression quality for stored pages
    DEFAULT_DOCUMENT_NAME: str = "New Document"
    WATCH_TIMEOUT: float = 30.0  # Upper bound for listing long-polls, in seconds

    # About
    APP_NAME: str = "Docusafe"
    APP_VERSION: str = "1.0.0"
    BUILD_NUMBER: str = "1001"
    SUPPORT_EMAIL: str = "support@docusafe.app"
    PRIVACY_POLICY_URL: str = "https://docusafe.app/privacy"
    TERMS_OF_SERVICE_URL: str = "https://docusafe.app/terms"
    SOCIAL_LINKS: dict[str, str] = {
        "Follow us on Twitter": "https://x.com/docusafe",
        "Check out our Instagram": "https://www.instagram.com/docusafe",
        "Connect on LinkedIn": "https://www.linkedin.com/company/docusafe",
        "Watch on TikTok": "https://www.tiktok.com/@docusafe",
        "Subscribe on YouTube": "https://youtube.com/@docusafe",
    }

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def model_post_init(self, __context) -> None:
        """Post initialization hook to set derived paths"""
        # Convert STORAGE_PATH to Path if it's a string
        if isinstance(self.STORAGE_PATH, str):
            self.STORAGE_PATH = Path(self.STORAGE_PATH)

        # Set derived paths if not explicitly provided
        self.IMAGES_PATH = Path(self.IMAGES_PATH) if self.IMAGES_PATH else self.STORAGE_PATH / "images"
        self.LOGS_PATH = Path(self.LOGS_PATH) if self.LOGS_PATH else self.STORAGE_PATH / "logs"

        # Create directories
        self.create_storage_dirs()

    def create_storage_dirs(self) -> None:
        """Create necessary storage directories if they don't exist"""
        for path in [self.STORAGE_PATH, self.IMAGES_PATH, self.LOGS_PATH]:
            path.mkdir(parents=True, exist_ok=True)

    @property
    def jpeg_quality_percent(self) -> int:
        """Map the 0..1 quality fraction onto Pillow's 1..95 scale"""
        fraction = min(max(self.JPEG_QUALITY, 0.0), 1.0)
        return max(1, min(95, round(fraction * 100)))

settings = Settings()
