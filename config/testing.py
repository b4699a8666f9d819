import os
import tempfile

from config.config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False

RESEND_API_KEY = None
RESEND_FROM_EMAIL = None
UPLOAD_ROOT = os.getenv("UPLOAD_ROOT", os.path.join(tempfile.gettempdir(), "hrmstech-test-uploads"))
