import logging
import sys

_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"

def configure_logging(level: str = "INFO"):
    root = logging.getLogger()
    root.setLevel(level)
    # uvicorn --reload imports main twice; keep a single handler
    if any(getattr(h, "_directory_handler", False) for h in root.handlers):
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._directory_handler = True
    root.addHandler(handler)
