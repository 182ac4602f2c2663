import logging

from linkcatalog.constants import LogEvent
from linkcatalog.exceptions import ConfigurationError
from linkcatalog.types import LambdaEvent, LambdaContext, LambdaResponse
from linkcatalog.dao import get_link_dao
from linkcatalog.dao.exceptions import DataStoreError
from linkcatalog.utils.config import app_env
from linkcatalog.utils.responses import json_response


logger = logging.getLogger(__name__)


def response_ok(*, store: str, links: int) -> LambdaResponse:
    return json_response(200, {'status': 'ok', 'environment': app_env(), 'store': store, 'links': links})


def response_unavailable(*, error: Exception) -> LambdaResponse:
    return json_response(
        503,
        {
            'status': 'error',
            'environment': app_env(),
            'reason': str(error),
            'error': error.__class__.__name__,
        },
    )


def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Report whether the link store is reachable

    HTTP responses:
        200: Link store reachable
            status: ok
            store: link store class name
            links: number of stored links
        503: Link store unavailable
            status: error
            reason: error message
            error: error class name (e.g. DataStoreError, BadConfigurationError)
    """
    try:
        dao = get_link_dao()
        if not dao.healthy():
            raise DataStoreError(f'{dao.__class__.__name__} failed its healthcheck.')
        links = dao.count()
    except (ConfigurationError, FileNotFoundError, DataStoreError) as error:
        logger.exception(
            'Link store healthcheck failed. Responding with 503.',
            extra={'event': LogEvent.HEALTHCHECK_FAILED, 'reason': str(error), 'error': error.__class__.__name__},
        )
        return response_unavailable(error=error)
    else:
        logger.info(
            'Link store healthcheck passed. Responding with 200.',
            extra={'event': LogEvent.HEALTHCHECK_PASSED, 'store': dao.__class__.__name__, 'links': links},
        )
        return response_ok(store=dao.__class__.__name__, links=links)
