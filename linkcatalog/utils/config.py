"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to
access configuration data stored in **AWS AppConfig**. Each environment
(`APP_ENV`) has a dedicated AppConfig *Environment* within the shared
AppConfig *Application* identified by `APP_NAME`. Configuration data is
stored as a JSON document under a configuration profile and deployed to
the corresponding environment.

The configuration document follows this structure:

    {
        "active_backend": "redis",
        "configs": {
            "links_api": {
                "redis": {"host": "...", "port": 6379, "db": 0},
                "json_file": {"path": "data/links.json"}
            }
        }
    }

Each Lambda loads its own section (e.g., `"links_api"`) and only the
options of the active backend are returned.

When running locally (`APP_ENV=local` or under SAM), the same document is
read from a YAML file instead:

    config/
    └── links_api/
        ├── local.yaml
        └── test.yaml

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    project_root() -> Path
        Return the absolute path to the project root directory, using
        `PROJECT_ROOT` when available.

    _load_local_yaml_config(func) -> Callable[[str], dict]:
        Load configuration from config/<function>/<env>.yaml when running locally.
        Decorates `load_config()`.

    load_config(function_name: str) -> dict
        Load configuration for a given Lambda and return it as
        `{<active backend>: {<options>}}`.

Example:
    Typical usage inside a Lambda handler:

        >>> from linkcatalog.utils.config import load_config
        >>> config = load_config('links_api')
        >>> config
        {'json_file': {'path': 'data/links.json'}}
"""

import os
import json
import functools
import logging
from pathlib import Path
from typing import Any
from collections.abc import Callable

import boto3
import yaml

from linkcatalog.constants import ENV
from linkcatalog.exceptions import BadConfigurationError
from linkcatalog.types import AppConfig, AppConfigDataClient
from linkcatalog.utils.helpers import require_environment
from linkcatalog.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME)


def project_root() -> Path:
    """Return the absolute path to the project root directory

    Finds the project root via the environment variable PROJECT_ROOT.
    Falls back to the directory containing the `linkcatalog` package.

    Returns:
        Path:
            Absolute path to the project root directory.
    """
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, Path(__file__).resolve().parents[2]))


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'linkcatalog'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'linkcatalog:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _active_backend_config(document: dict[str, Any], function_name: str) -> AppConfig:
    """Extract `{backend: options}` for one function from a configuration document"""
    try:
        backend = document['active_backend']
        return {backend: document['configs'][function_name][backend]}
    except (KeyError, TypeError) as e:
        raise BadConfigurationError(f"Configuration has no active backend section for '{function_name}'.") from e


def _load_local_yaml_config(func: Callable[[str], dict]) -> Callable[[str], dict]:
    """Decorator: load configuration from a local YAML file when running locally

    Behavior:
        - If the application is running locally, read
          `<project root>/config/<function name>/<app env>.yaml`.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Args:
        func (Callable[[str], dict]):
            load_config()

    Returns:
        Callable[[str], dict]:
            A compatible function with load_config() which prefers the local
            YAML configuration when running locally.

    Raises:
        FileNotFoundError:
            If running locally and the YAML file doesn't exist.
        BadConfigurationError:
            If the YAML document lacks the active backend section.
    """

    @functools.wraps(func)
    def wrapper(function_name: str, *args, **kwargs) -> dict:
        if not running_locally():
            return func(function_name, *args, **kwargs)

        path = project_root() / 'config' / function_name / f'{app_env()}.yaml'
        logger.debug('Trying to load configuration from local YAML file.', extra={'path': str(path), 'functionName': function_name})
        with open(path, encoding='utf-8') as f:
            document = yaml.safe_load(f)

        data = _active_backend_config(document, function_name)
        logger.debug('Loaded configuration from local YAML file.', extra={'path': str(path), 'functionName': function_name})
        return data

    return wrapper


@_load_local_yaml_config
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(function_name: str) -> AppConfig:
    """Load configuration for a given Lambda from AWS AppConfig

    Fetches the AppConfig JSON once and returns the active backend's section
    for the requested Lambda function (e.g., 'links_api').

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        function_name (str):
            Name of the configuration section (e.g., "links_api").

    Returns:
        dict: `{<active backend>: {<options>}}`

    Example:
        >>> app_config = load_config('links_api')
        >>> app_config['redis']['host']
        'redis-15501.host.docker.internal'
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'functionName': function_name})

    appconfig: AppConfigDataClient = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    document = json.loads(content.decode('utf-8'))

    data = _active_backend_config(document, function_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'functionName': function_name, 'build': document.get('build')})
    return data
