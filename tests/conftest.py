import os

# gevent monkey-patching is for the production server only
os.environ.setdefault('SOCKETIO_ASYNC_MODE', 'threading')
os.environ.setdefault('SECRET_KEY', 'test-secret')
