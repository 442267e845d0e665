from .base import *  # noqa: F401,F403

DEBUG = True

LOGGING["loggers"]["playback"]["level"] = "DEBUG"  # noqa: F405
