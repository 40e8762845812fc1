"""Configuration management for lineseek."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CHUNK_SIZE = 1 << 20  # 1 MiB per chunk
DEFAULT_CACHE_CAPACITY = 64  # resident chunks before LRU eviction


class Settings(BaseSettings):
    """Application settings.
    
    Values come from keyword arguments, then ``LINESEEK_*`` environment
    variables, then an optional ``.env`` file.
    """
    
    model_config = SettingsConfigDict(
        env_prefix="LINESEEK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    # Storage base directory
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".lineseek")
    
    # Chunking
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, ge=1)
    cache_capacity: int = Field(default=DEFAULT_CACHE_CAPACITY, ge=1)
    
    # Output
    show_progress: bool = True
    
    # Debug settings
    debug: bool = False
    
    @property
    def debug_log_dir(self) -> Path:
        """Get the debug log directory."""
        return self.data_dir / "logs"
