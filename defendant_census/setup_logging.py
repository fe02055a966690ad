import logging, sys

# Chatty third-party loggers: the Dash dev server logs every hover callback
NOISY_LOGGERS = ("werkzeug", "urllib3")

def setup_logging(level: str = "INFO"):
    logger = logging.getLogger()
    if logger.handlers:  # don’t double add during reload
        return
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    h = logging.StreamHandler(sys.stdout)
    h.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s :: %(message)s"
    ))
    logger.addHandler(h)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
