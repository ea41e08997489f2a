import locale
import logging

logger = logging.getLogger(__name__)


def setup_locale():
    """
    Loads the monetary locale from the environment (LC_ALL, LC_MONETARY, LANG).

    Python starts in the C locale, so prices would never use the host's
    currency conventions without this. An unknown locale name leaves C in place.
    """
    try:
        name = locale.setlocale(locale.LC_MONETARY, "")
    except locale.Error as e:
        logger.warning("Could not load monetary locale from environment: %s", e)
        return locale.setlocale(locale.LC_MONETARY)
    logger.info("Monetary locale set to %s", name)
    return name
