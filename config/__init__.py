"""Configuration for the job feed scraper.

Local overrides live in ``config/settings.py``, which is git-ignored. On a
fresh checkout it is seeded from ``settings.example.py`` so the package
imports without a manual setup step.
"""

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).parent


def ensure_settings_file(config_dir: Path = CONFIG_DIR) -> bool:
    """Seed settings.py from the example template when it is missing.

    Returns True when a new file was written.
    """
    target = config_dir / "settings.py"
    template = config_dir / "settings.example.py"
    if target.exists() or not template.exists():
        return False
    try:
        shutil.copyfile(template, target)
    except OSError as e:
        logger.warning(f"Could not create {target.name} from template: {e}")
        return False
    logger.info(f"Seeded {target} from {template.name}")
    return True


ensure_settings_file()

from .settings import *  # noqa: E402,F401,F403
