"""Instruction templates shipped with the package."""

from pathlib import Path

DEFAULT_TEMPLATE_PATH = Path(__file__).parent / "work_summary.md"


def load_instruction_template(template_path: Path | None = None) -> str:
    """Load the system instruction sent ahead of every corpus.

    Args:
        template_path: Path to a custom template file.
                      Defaults to the built-in template.

    Returns:
        The content of the template file.

    Raises:
        FileNotFoundError: If the template file does not exist.
        RuntimeError: If the template file cannot be read.
    """
    path = template_path or DEFAULT_TEMPLATE_PATH
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FileNotFoundError(f"Instruction template file not found: {path}") from None
    except Exception as e:
        raise RuntimeError(f"Failed to read instruction template file: {path}: {e}") from e
