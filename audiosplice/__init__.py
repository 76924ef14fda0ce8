"""
audiosplice - in-memory multichannel audio editing engine.

Region cut/extract/insert/overwrite, channel-targeted gain and pan,
multi-track mixing and WAV/MP3/WebM/MP4 export.
"""
from .utils import logger
from .core import *  # noqa: F401,F403
from .core import __all__ as _core_all

__version__ = "0.1.0"

__all__ = ['logger', '__version__', *_core_all]
