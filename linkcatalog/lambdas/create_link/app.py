import json
import logging

from linkcatalog.constants import LogEvent
from linkcatalog.exceptions import ConfigurationError
from linkcatalog.types import LambdaEvent, LambdaContext, LambdaResponse
from linkcatalog.dao import get_link_dao, IdentifiedLinkBaseDAO
from linkcatalog.dao.exceptions import DataStoreError, LinkValidationError
from linkcatalog.utils.helpers import guarantee_500_response, json_body
from linkcatalog.utils.responses import json_response, response_400, response_500


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to create a link

    This Lambda handler follows this procedure to create links:
    - Step 1: Get the process's link store
    - Step 2: Extract the candidate link from the request body
    - Step 3: Validate and store the link (via DAO)
    - Step 4: Respond with the stored link

    HTTP responses:
        201: Link created (identifier-addressed store)
        200: Link created (index-addressed store)
            success: true
            link: stored link including its id
        400: Bad client request
            message: invalid JSON body, or missing/empty title or url
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
        >>> event = {'body': '{"title": "Zoom Meeting", "url": "https://zoom.us"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['link']['emoji']
        '🔗'
    """
    # 1- Get the process's link store
    try:
        dao = get_link_dao()
    except (ConfigurationError, FileNotFoundError, DataStoreError) as error:
        logger.exception('Failed to initialize link store. Responding with 500.', extra={'event': LogEvent.DATA_STORE_ERROR})
        return response_500(error_code=getattr(error, 'error_code', None))

    # 2- Extract the candidate link from the request body
    try:
        candidate = json_body(event)
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': LogEvent.INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=LogEvent.INVALID_JSON_BODY)
    if not isinstance(candidate, dict):
        logger.info('JSON body is not an object. Responding with 400.', extra={'event': LogEvent.INVALID_JSON_BODY})
        return response_400(message='JSON body must be an object', error_code=LogEvent.INVALID_JSON_BODY)

    # 3- Validate and store the link
    try:
        link = dao.create(candidate)
    except LinkValidationError as error:
        logger.info('Invalid link. Responding with 400.', extra={'event': LogEvent.INVALID_LINK, 'reason': str(error)})
        return response_400(message=str(error), error_code=error.error_code)
    except DataStoreError as error:
        logger.exception('Failed to store link. Responding with 500.', extra={'event': LogEvent.DATA_STORE_ERROR})
        return response_500(message='failed to add link', error_code=error.error_code)

    # 4- Respond with the stored link
    status_code = 201 if isinstance(dao, IdentifiedLinkBaseDAO) else 200
    logger.info(
        'Created link. Responding with %s.',
        status_code,
        extra={'event': LogEvent.LINK_CREATED, 'link_id': link.id},
    )
    return json_response(status_code, {'success': True, 'link': link.to_dict()})
