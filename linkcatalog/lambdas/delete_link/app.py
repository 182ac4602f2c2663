import logging

from linkcatalog.constants import LogEvent
from linkcatalog.exceptions import ConfigurationError
from linkcatalog.types import LambdaEvent, LambdaContext, LambdaResponse
from linkcatalog.dao import get_link_dao
from linkcatalog.dao.exceptions import DataStoreError, LinkNotFoundError
from linkcatalog.utils.helpers import guarantee_500_response, path_parameter
from linkcatalog.utils.responses import json_response, response_400, response_404, response_500


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to delete a link

    This Lambda handler follows this procedure to delete links:
    - Step 1: Get the process's link store
    - Step 2: Extract the link id (position or identifier) from the request path
    - Step 3: Remove the link (via DAO)
    - Step 4: Respond with the removed link

    NOTE: with an index-addressed store the id is the link's position in the
          last listing. Every deletion shifts later positions down by one.

    HTTP responses:
        200: Link deleted
            success: true
            link: the removed link
        400: Bad client request
            message: missing link id in path
        404: Not found
            message: id is not an integer, out of range, or unknown
        500: Internal server error
            message: the link store couldn't be read or written

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> response = lambda_handler({'pathParameters': {'link_id': '0'}}, None)
        >>> json.loads(response['body'])
        {'success': True, 'link': {'id': '0', 'title': 'LMS Kampus', ...}}
    """
    # 1- Get the process's link store
    try:
        dao = get_link_dao()
    except (ConfigurationError, FileNotFoundError, DataStoreError) as error:
        logger.exception('Failed to initialize link store. Responding with 500.', extra={'event': LogEvent.DATA_STORE_ERROR})
        return response_500(error_code=getattr(error, 'error_code', None))

    # 2- Extract the link id from the request path
    link_id = path_parameter(event, 'link_id')
    if not link_id:
        logger.info('Missing "link_id" in path. Responding with 400.', extra={'event': LogEvent.MISSING_LINK_ID})
        return response_400(message="missing 'link_id' in path", error_code=LogEvent.MISSING_LINK_ID)

    # 3- Remove the link
    try:
        link = dao.delete(link_id)
    except LinkNotFoundError as error:
        logger.info('Link not found. Responding with 404.', extra={'event': LogEvent.LINK_NOT_FOUND, 'link_id': link_id})
        return response_404(message=f"link with id '{link_id}' doesn't exist", error_code=error.error_code)
    except DataStoreError as error:
        logger.exception('Failed to delete link. Responding with 500.', extra={'event': LogEvent.DATA_STORE_ERROR})
        return response_500(message='failed to delete link', error_code=error.error_code)

    # 4- Respond with the removed link
    logger.info('Deleted link. Responding with 200.', extra={'event': LogEvent.LINK_DELETED, 'link_id': link_id})
    return json_response(200, {'success': True, 'link': link.to_dict()})
