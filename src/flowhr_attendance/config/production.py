import os

from .base import *  # noqa: F401,F403

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
TRUST_PROXY_HEADERS = bool(int(os.getenv("TRUST_PROXY_HEADERS", "1")))
