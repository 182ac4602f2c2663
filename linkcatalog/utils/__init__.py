from linkcatalog.utils.config import app_env, app_name, project_root, app_prefix, load_config
from linkcatalog.utils.helpers import json_body, path_parameter, require_environment, guarantee_500_response
from linkcatalog.utils.logging import initialize_logging


__all__ = [
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'load_config',
    'json_body',
    'path_parameter',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
