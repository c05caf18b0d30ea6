from pathlib import Path

from prompt_refiner.refinement.exceptions import GatewayConfigurationError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_system_prompt(path: Path | None = None) -> str:
    """Load the system instruction sent with every completion request.

    Args:
        path: Path to the prompt file.
              Defaults to the bundled system_prompt.txt.

    Returns:
        The instruction text, including the rejection rule, output schema
        and scoring guide.

    Raises:
        GatewayConfigurationError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "system_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise GatewayConfigurationError(f"Failed to load system prompt: {exc}") from exc
