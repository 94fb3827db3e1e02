from .settings import *  # noqa: F401,F403

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

DEBUG = False
STRIPE_SECRET_KEY = ''
STRIPE_USE_STUB = True
PAYMENTS_DEDUPLICATE_INTENTS = False
IMGBB_API_KEY = ''
IMAGE_HOST_USE_STUB = True
PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']
