import os
from pathlib import Path

from aws_lambda_powertools.logging import Logger
from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

logger = Logger()


class AppConfig(BaseModel):
    """Application configuration."""

    app_env: str = Field(
        description="Application environment (local, dev, test or prod)"
    )
    version: str = Field(description="Application version")
    commit_hash: str = Field(description="Commit hash")
    signature_width_fraction: float = Field(
        default=0.3,
        gt=0,
        le=1,
        description="Width of a new signature relative to the page display width",
    )
    default_zoom: float = Field(default=1.2, gt=0, description="Initial preview zoom")
    min_zoom: float = Field(default=0.6, gt=0, description="Smallest preview zoom")
    max_zoom: float = Field(default=2.0, gt=0, description="Largest preview zoom")
    pad_width: int = Field(default=600, gt=0, description="Signature pad width in px")
    pad_height: int = Field(default=200, gt=0, description="Signature pad height in px")
    pad_stroke_width: int = Field(
        default=2, gt=0, description="Signature pad stroke width in px"
    )
    output_file_name: str = Field(
        default="signed.pdf", description="File name offered for the signed document"
    )

    @model_validator(mode="after")
    def check_zoom_range(self) -> "AppConfig":
        if not self.min_zoom <= self.default_zoom <= self.max_zoom:
            raise ValueError(
                f"default_zoom {self.default_zoom} outside [{self.min_zoom}, {self.max_zoom}]"
            )
        return self

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load configuration from environment variables.

        In 'local' mode (default), it first loads variables from a .env file.
        In 'dev', 'test' and 'prod' modes, it reads directly from environment variables.
        """

        app_env = os.getenv("APP_ENV", "local").lower()
        logger.debug("App environment", extra={"app_env": app_env})
        if app_env == "local":
            dotenv_path = Path(".env")
            load_dotenv(dotenv_path=dotenv_path, override=True)
            logger.debug("Loaded .env file", extra={"dotenv_path": str(dotenv_path)})
        elif app_env not in ["dev", "test", "prod"]:
            raise ValueError(f"Invalid app environment: {app_env}")

        return cls(
            app_env=app_env,
            version=os.getenv("VERSION", "unknown"),
            commit_hash=os.getenv("COMMIT_HASH", "unknown"),
            signature_width_fraction=float(os.getenv("SIGNATURE_WIDTH_FRACTION", "0.3")),
            default_zoom=float(os.getenv("DEFAULT_ZOOM", "1.2")),
            min_zoom=float(os.getenv("MIN_ZOOM", "0.6")),
            max_zoom=float(os.getenv("MAX_ZOOM", "2.0")),
            pad_width=int(os.getenv("PAD_WIDTH", "600")),
            pad_height=int(os.getenv("PAD_HEIGHT", "200")),
            pad_stroke_width=int(os.getenv("PAD_STROKE_WIDTH", "2")),
            output_file_name=os.getenv("OUTPUT_FILE_NAME", "signed.pdf"),
        )
