# gpr/config.py
import os
import logging

# Read version from VERSION file
_version_file = os.path.join(os.path.dirname(__file__), "..", "VERSION")
try:
    with open(os.path.abspath(_version_file), "r") as f:
        __version__ = f.read().strip()
except FileNotFoundError:
    __version__ = "0.0.0"

_INVERSION_METHODS = ("direct", "high-accuracy-svd", "fast-svd", "symmetric-eigen")


class _GPRConfig:
    def __init__(self):
        self.version = __version__
        self.dtype = float
        self.workers = os.cpu_count() or 1
        self.inversion_method = "direct"
        # logger lives in config
        self.logger = logging.getLogger("gpr")
        if not self.logger.handlers:
            h = logging.StreamHandler()
            h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
            self.logger.addHandler(h)
        self.logger.setLevel(logging.WARNING)

    def __str__(self):
        return (
            f"GPRConfig("
            f"version={self.version}, "
            f"dtype={self.dtype}, "
            f"workers={self.workers}, "
            f"inversion_method={self.inversion_method})"
        )

    def __repr__(self):
        return (
            f"<GPRConfig "
            f"version={self.version!r}, "
            f"dtype={self.dtype!r}, "
            f"workers={self.workers!r}, "
            f"inversion_method={self.inversion_method!r}>"
        )

    def update(self, **kwargs):
        for k, v in kwargs.items():
            setattr(self, k, v)
        return self


_config = _GPRConfig()


def get_config():
    return _config


def set_workers(workers: int):
    """Default number of threads used to assemble kernel matrices and vectors."""
    if workers < 0:
        raise ValueError("number of workers must be 0 or greater")
    _config.workers = int(workers)


def set_inversion_method(method: str):
    """Default inversion method of newly created engines."""
    if method not in _INVERSION_METHODS:
        raise ValueError(f"inversion method must be one of {_INVERSION_METHODS}")
    _config.inversion_method = method


def get_logger():
    return _config.logger


def set_log_level(level):
    _config.logger.setLevel(level)
