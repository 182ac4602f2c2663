import logging

from linkcatalog.constants import LogEvent
from linkcatalog.exceptions import ConfigurationError
from linkcatalog.types import LambdaEvent, LambdaContext, LambdaResponse
from linkcatalog.dao import get_link_dao
from linkcatalog.dao.exceptions import DataStoreError
from linkcatalog.utils.helpers import guarantee_500_response
from linkcatalog.utils.responses import json_response, response_500


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to list all links

    This Lambda handler follows this procedure to list links:
    - Step 1: Get the process's link store
    - Step 2: Read every link from the store
    - Step 3: Respond with the links as a JSON array

    HTTP responses:
        200: JSON array of links
            id, title, url, emoji, description (+ createdAt for identifier-addressed stores)
        500: Internal server error
            message: the link store couldn't be read

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> response = lambda_handler({'httpMethod': 'GET', 'path': '/links'}, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])[0]['title']
        'LMS Kampus'
    """
    # 1- Get the process's link store
    try:
        dao = get_link_dao()
    except (ConfigurationError, FileNotFoundError, DataStoreError) as error:
        logger.exception('Failed to initialize link store. Responding with 500.', extra={'event': LogEvent.DATA_STORE_ERROR})
        return response_500(error_code=getattr(error, 'error_code', None))

    # 2- Read every link
    try:
        links = dao.all()
    except DataStoreError as error:
        logger.exception('Failed to read links. Responding with 500.', extra={'event': LogEvent.DATA_STORE_ERROR})
        return response_500(message='failed to read links', error_code=error.error_code)

    # 3- Respond with the links
    logger.info('Listed %s links. Responding with 200.', len(links), extra={'event': LogEvent.LINKS_LISTED})
    return json_response(200, [link.to_dict() for link in links])
