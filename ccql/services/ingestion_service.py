# ccql/services/ingestion_service.py
"""
Service for reading prompts from assistant history files.

Supports:
- history.jsonl (one JSON object per line, prompt text under "display")
- Plain text files with one prompt per line
"""
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

from ..config import AppConfig, load_config
from ..domain.prompt import PromptRecord
from ..logging_config import get_logger
from ..settings import get_settings

logger = get_logger('ingestion_service')

PathLike = Union[str, Path]


class IngestionError(Exception):
    """Raised when a prompt source cannot be read or parsed."""


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a history timestamp.

    Accepts epoch milliseconds (int/float) or an ISO-8601 string
    (a trailing 'Z' is accepted). Returns None for anything else.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return None


class IngestionService:
    """
    Loads PromptRecords from history files.
    """

    def __init__(self, config: Optional[AppConfig] = None, data_dir: Optional[PathLike] = None):
        """
        Initialize the ingestion service.

        Args:
            config: Application configuration
            data_dir: Assistant data directory (default: CLAUDE_DATA_DIR setting)
        """
        self.config = config or load_config()
        self.data_dir = Path(data_dir) if data_dir is not None else get_settings().claude_data_dir

    def history_path(self, data_dir: Optional[PathLike] = None) -> Path:
        """Location of the history file inside a data directory."""
        base = Path(data_dir) if data_dir is not None else self.data_dir
        return base / self.config.ingestion.history_file

    def load(self, path: PathLike) -> List[PromptRecord]:
        """
        Load prompts from a file, choosing the reader by extension.

        .jsonl / .json files are read as history; anything else as text lines.
        """
        path = Path(path)
        if path.suffix.lower() in ('.jsonl', '.json'):
            return self.load_history(path)
        return self.load_text_lines(path)

    def load_history(self, path: Optional[PathLike] = None) -> List[PromptRecord]:
        """
        Read a JSONL history file.

        Blank lines are skipped. Records without a string text field are
        skipped and counted.

        Args:
            path: Path to the history file (default: history file in data_dir)

        Returns:
            PromptRecords in file order

        Raises:
            IngestionError: If the file is missing, unreadable, or a line is
                not a JSON object
        """
        path = Path(path) if path is not None else self.history_path()
        text_field = self.config.ingestion.text_field
        records: List[PromptRecord] = []
        skipped = 0

        for line_number, line in self._read_lines(path):
            line = line.strip()
            if not line:
                continue

            try:
                entry = json.loads(line)
            except json.JSONDecodeError as e:
                raise IngestionError(f"{path}:{line_number}: invalid JSON: {e.msg}") from e

            if not isinstance(entry, dict):
                raise IngestionError(f"{path}:{line_number}: expected a JSON object")

            text = entry.get(text_field)
            if not isinstance(text, str):
                skipped += 1
                continue

            records.append(PromptRecord(
                text=text,
                timestamp=parse_timestamp(entry.get('timestamp')),
                session_id=entry.get('sessionId'),
                project=entry.get('project'),
            ))

        if skipped:
            logger.info(f"Skipped {skipped} history entries without '{text_field}' text")
        logger.info(f"Loaded {len(records)} prompts from {path}")
        return records

    def load_text_lines(self, path: PathLike) -> List[PromptRecord]:
        """
        Read a plain text file with one prompt per line.

        Raises:
            IngestionError: If the file is missing or unreadable
        """
        path = Path(path)
        records = [
            PromptRecord(text=line.rstrip('\r\n'))
            for _, line in self._read_lines(path)
            if line.strip()
        ]
        logger.info(f"Loaded {len(records)} prompts from {path}")
        return records

    def _read_lines(self, path: Path):
        if not path.is_file():
            raise IngestionError(f"File not found: {path}")
        try:
            with open(path, 'r', encoding=self.config.ingestion.encoding) as f:
                lines = f.readlines()
        except (OSError, UnicodeDecodeError) as e:
            raise IngestionError(f"Could not read {path}: {e}") from e
        return enumerate(lines, start=1)


def prompts_from_strings(texts: Iterable[str]) -> List[PromptRecord]:
    """Wrap plain strings as PromptRecords without metadata."""
    return [PromptRecord(text=text) for text in texts]
