import gunicorn.http.wsgi
from functools import wraps
from dotenv import load_dotenv
from common.utils import safe_get_env_var, get_int_env_var

load_dotenv()

# PORT is injected by the hosting platform
bind = f"0.0.0.0:{safe_get_env_var('PORT', '6060')}"
wsgi_app = "api:create_app()"
workers = get_int_env_var('WEB_CONCURRENCY', 2)
loglevel = safe_get_env_var('GLOBAL_LOG_LEVEL', 'info').lower()
accesslog = "-"

def strip_server_header(func):
    @wraps(func)
    def default_headers(*args, **kwargs):
        return [h for h in func(*args, **kwargs) if not h.startswith('Server: ')]
    return default_headers

gunicorn.http.wsgi.Response.default_headers = strip_server_header(gunicorn.http.wsgi.Response.default_headers)
