from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_SAMPLES_ROOT = Path("Audio2Face-3D-Samples")
_CLIENT_ROOT = _SAMPLES_ROOT / "scripts" / "audio2face_3d_api_client"


class FfmpegConfig(BaseSettings):
    """Transcoder configuration"""

    binary: str = "ffmpeg"
    codec: str = "pcm_s16le"
    sample_rate: int = Field(default=16000, ge=8000)
    channels: int = Field(default=1, ge=1)
    output_suffix: str = "_pcm.wav"
    timeout_seconds: Optional[float] = Field(default=None, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="FFMPEG_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


class Audio2FaceConfig(BaseSettings):
    """Audio2Face-3D client configuration."""

    python_path: Path = _SAMPLES_ROOT / "myenv311" / "bin" / "python"
    client_script: Path = _CLIENT_ROOT / "nim_a2f_3d_client.py"
    config_dir: Path = _CLIENT_ROOT / "config"
    timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Upper bound for one inference call; unset waits for process exit.",
    )

    model_config = SettingsConfigDict(
        env_prefix="A2F_",
        env_file=".env",
        secrets_dir=".secrets",
        case_sensitive=False,
        extra="ignore",
    )


class StorageConfig(BaseSettings):
    """Scratch and static directories."""

    scratch_root: Path = Path("uploads")
    public_dir: Path = Path("public")
    models_dir: Path = Path("models")

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Application settings"""

    app_name: str = "Audio2Face Animation Backend"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000
    log_file: str = "logs/app.log"
    pipeline_log_file: str = "logs/animation_pipeline.log"

    # Transcoder
    ffmpeg: FfmpegConfig = Field(default_factory=FfmpegConfig)

    # Inference client
    a2f: Audio2FaceConfig = Field(default_factory=Audio2FaceConfig)

    # Scratch + static files
    storage: StorageConfig = Field(default_factory=StorageConfig)

    # CORS
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
