"""
.env file loading for pco-cli.

Credentials such as PLANNING_CENTER_PAT are usually kept in a .env file next
to the project that uses them. This module finds the nearest one and loads it
into the process environment without overriding variables that are already
set.
"""

from pathlib import Path
from typing import Optional, Dict, List
import logging

from dotenv import dotenv_values, load_dotenv

logger = logging.getLogger(__name__)

EXAMPLE_ENV_CONTENT = '''# pco-cli configuration
# Lines starting with # are comments and will be ignored.

# Personal Access Token from https://api.planningcenteronline.com/oauth/applications
# Format: app_id:secret
PLANNING_CENTER_PAT=your-app-id:your-secret

# Optional: OAuth application instead of a Personal Access Token
# PCO_CLIENT_ID=
# PCO_CLIENT_SECRET=

# Optional: connection tuning
# PCO_TIMEOUT=30
# PCO_MAX_RETRY_ATTEMPTS=3

# Optional: CLI defaults
# PCO_DEFAULT_OUTPUT_FORMAT=table
# PCO_DEFAULT_PAGE_SIZE=25
# PCO_LOG_LEVEL=WARNING
'''


class EnvFileLoader:
    """
    .env file loader with hierarchical search.

    Search order (stops at first file found):
    1. Current directory: .pco/.env -> .env
    2. Parent directories (up to git root or home): .pco/.env -> .env
    3. Home directory: ~/.pco/.env -> ~/.env
    """

    CONFIG_DIR_NAME = ".pco"
    ENV_FILE_NAME = ".env"

    def __init__(self, working_directory: Optional[Path] = None):
        """Initialize env file loader.

        Args:
            working_directory: Starting directory for search
        """
        self.working_directory = Path(working_directory or Path.cwd()).resolve()
        self._loaded_file: Optional[Path] = None
        self._loaded_vars: Dict[str, str] = {}

    def load_env_file(self) -> Optional[Path]:
        """Load environment variables from the nearest .env file.

        Returns:
            Path to loaded .env file or None if none found
        """
        env_file_path = self._find_env_file()

        if env_file_path is None:
            logger.debug("No .env file found in search path")
            return None

        load_dotenv(env_file_path, override=False)
        self._loaded_file = env_file_path
        self._loaded_vars = {
            key: value for key, value in dotenv_values(env_file_path).items() if value is not None
        }

        logger.info(f"Loaded environment variables from: {env_file_path}")
        return env_file_path

    def get_loaded_file(self) -> Optional[Path]:
        return self._loaded_file

    def get_loaded_vars(self) -> Dict[str, str]:
        """Variables defined in the loaded file (names only are safe to display)."""
        return self._loaded_vars.copy()

    def get_search_paths(self) -> List[Path]:
        """Get list of all paths that would be searched for .env files, in order."""
        search_paths: List[Path] = []
        current_dir = self.working_directory

        while current_dir != current_dir.parent:
            search_paths.append(current_dir / self.CONFIG_DIR_NAME / self.ENV_FILE_NAME)
            search_paths.append(current_dir / self.ENV_FILE_NAME)

            if self._should_stop_search(current_dir):
                break

            current_dir = current_dir.parent

        home_dir = Path.home()
        search_paths.append(home_dir / self.CONFIG_DIR_NAME / self.ENV_FILE_NAME)
        search_paths.append(home_dir / self.ENV_FILE_NAME)

        return search_paths

    def _find_env_file(self) -> Optional[Path]:
        for candidate in self.get_search_paths():
            if candidate.is_file():
                return candidate
        return None

    def _should_stop_search(self, directory: Path) -> bool:
        """Stop at the git repository root or the home directory."""
        return (directory / ".git").exists() or directory == Path.home()

    def create_example_env_file(self, target_dir: Optional[Path] = None, scope: str = "project") -> Path:
        """Create an example .env file.

        Args:
            target_dir: Directory to create file in
            scope: 'project' (./.pco) or 'user' (~/.pco) when no directory is given

        Returns:
            Path to created example file

        Raises:
            FileExistsError: If a .env file already exists there
        """
        if target_dir is None:
            base = Path.home() if scope == "user" else self.working_directory
            target_dir = base / self.CONFIG_DIR_NAME

        target_dir.mkdir(parents=True, exist_ok=True)
        env_file_path = target_dir / self.ENV_FILE_NAME
        if env_file_path.exists():
            raise FileExistsError(f"{env_file_path} already exists")

        env_file_path.write_text(EXAMPLE_ENV_CONTENT, encoding="utf-8")
        logger.info(f"Created example .env file: {env_file_path}")
        return env_file_path
