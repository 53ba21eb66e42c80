# gsearch/core/config.py

"""Configuration management."""
import json
import sys
from pathlib import Path
from typing import Optional

DEFAULT_DB_PATH = '~/.local/share/fsearch/fsearch.db'


class Config:
    """User defaults for the command line, stored as JSON."""

    def __init__(self, config_file: Optional[Path] = None):
        self.config_file = config_file or Path.home() / '.gsearch_config.json'
        self.default_config = {
            'database_path': DEFAULT_DB_PATH,
            'language': None,  # None keeps the language detected from the locale
            'case_sensitive': False,
            'match_whole_word': False,
            'max_results': 0,
            'output_format': 'text',
            'sort_by': None,
        }
        self.config = self.load_config()

    def load_config(self) -> dict:
        """Load configuration from file, merged over the defaults."""
        config = self.default_config.copy()
        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    loaded = json.load(f)
            except (OSError, ValueError) as e:
                print(f"Warning: ignoring unreadable config {self.config_file}: {e}", file=sys.stderr)
                return config
            if isinstance(loaded, dict):
                config.update(loaded)
        return config

    def get(self, key: str, default=None):
        """Get configuration value."""
        return self.config.get(key, default)

    def database_path(self) -> Path:
        return Path(self.config.get('database_path') or DEFAULT_DB_PATH).expanduser()
