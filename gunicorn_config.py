import multiprocessing

# Gunicorn Production Configuration
# Requests mostly wait on the backend / geocoder, so threads pay off
workers = multiprocessing.cpu_count() + 1
threads = 4
worker_class = 'gthread'
bind = '0.0.0.0:8080'

# Backend calls time out on their own (BACKEND_TIMEOUT)
timeout = 60
max_requests = 1000
max_requests_jitter = 100
keepalive = 5

# Logging
accesslog = '-'       # Stdout
errorlog = '-'        # Stderr
loglevel = 'info'
capture_output = True
