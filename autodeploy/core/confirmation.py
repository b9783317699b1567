"""Go/no-go decision taken after a build finishes."""
from typing import Callable

from autodeploy.core.errors import PromptUnavailableError
from autodeploy.core.logger import get_logger
from autodeploy.models.config import DeploymentConfig

logger = get_logger(__name__)

CONFIRM_MESSAGE = "Build finished. Deploy to the remote server now?"
AFFIRMATIVE_ANSWERS = {"y", "yes"}


def is_affirmative(answer: str) -> bool:
    """Return True for y/yes in any case, ignoring surrounding whitespace."""
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS


def should_proceed(
    config: DeploymentConfig,
    is_interactive: bool,
    prompt_fn: Callable[[str], str],
) -> bool:
    """Decide whether a deployment should go ahead.

    Args:
        config: Resolved deployment options
        is_interactive: Whether stdin and stdout are both attached to a terminal
        prompt_fn: Reads one line of operator input after showing a message

    Returns:
        True to deploy, False to skip. Skipping is not a failure.
    """
    if config.auto_confirm:
        return True

    if not is_interactive:
        logger.warning("No interactive terminal available, skipping deployment")
        return False

    try:
        answer = prompt_fn(f"{CONFIRM_MESSAGE} (y/N): ")
    except PromptUnavailableError as e:
        logger.warning(f"Could not read confirmation ({e}), skipping deployment")
        return False

    return is_affirmative(answer)
