import json
import logging

from linkcatalog.constants import LogEvent
from linkcatalog.exceptions import ConfigurationError
from linkcatalog.types import LambdaEvent, LambdaContext, LambdaResponse
from linkcatalog.dao import get_link_dao, IdentifiedLinkBaseDAO
from linkcatalog.dao.exceptions import DataStoreError, LinkNotFoundError, LinkValidationError
from linkcatalog.utils.helpers import guarantee_500_response, json_body, path_parameter
from linkcatalog.utils.responses import json_response, response_400, response_404, response_405, response_500


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to partially update a link

    This Lambda handler follows this procedure to update links:
    - Step 1: Get the process's link store
    - Step 2: Extract the link id from the request path
    - Step 3: Extract the partial link from the request body
    - Step 4: Overwrite the supplied fields (via DAO)
    - Step 5: Respond with the updated link

    Only identifier-addressed stores support updates. Fields missing from the
    body keep their stored value.

    HTTP responses:
        200: Updated link
        400: Bad client request
            message: missing link id, invalid JSON body, no known fields, or empty title/url
        404: Not found
            message: no link with this id
        405: Method not allowed
            message: the configured link store is index-addressed
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
        >>> event = {'pathParameters': {'link_id': '9f1c...'}, 'body': '{"description": "Kelas online"}'}
        >>> response = lambda_handler(event, None)
        >>> json.loads(response['body'])['description']
        'Kelas online'
    """
    # 1- Get the process's link store
    try:
        dao = get_link_dao()
    except (ConfigurationError, FileNotFoundError, DataStoreError) as error:
        logger.exception('Failed to initialize link store. Responding with 500.', extra={'event': LogEvent.DATA_STORE_ERROR})
        return response_500(error_code=getattr(error, 'error_code', None))

    if not isinstance(dao, IdentifiedLinkBaseDAO):
        logger.info(
            'Link store does not support updates. Responding with 405.',
            extra={'event': LogEvent.UPDATE_NOT_SUPPORTED, 'store': dao.__class__.__name__},
        )
        return response_405(message='links in this store can only be created or deleted', error_code=LogEvent.UPDATE_NOT_SUPPORTED)

    # 2- Extract the link id from the request path
    link_id = path_parameter(event, 'link_id')
    if not link_id:
        logger.info('Missing "link_id" in path. Responding with 400.', extra={'event': LogEvent.MISSING_LINK_ID})
        return response_400(message="missing 'link_id' in path", error_code=LogEvent.MISSING_LINK_ID)

    # 3- Extract the partial link from the request body
    try:
        fields = json_body(event)
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': LogEvent.INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=LogEvent.INVALID_JSON_BODY)
    if not isinstance(fields, dict):
        logger.info('JSON body is not an object. Responding with 400.', extra={'event': LogEvent.INVALID_JSON_BODY})
        return response_400(message='JSON body must be an object', error_code=LogEvent.INVALID_JSON_BODY)

    # 4- Overwrite the supplied fields
    try:
        link = dao.update(link_id, fields)
    except LinkValidationError as error:
        logger.info('Invalid link update. Responding with 400.', extra={'event': LogEvent.INVALID_LINK, 'reason': str(error)})
        return response_400(message=str(error), error_code=error.error_code)
    except LinkNotFoundError as error:
        logger.info('Link not found. Responding with 404.', extra={'event': LogEvent.LINK_NOT_FOUND, 'link_id': link_id})
        return response_404(message=f"link with id '{link_id}' doesn't exist", error_code=error.error_code)
    except DataStoreError as error:
        logger.exception('Failed to update link. Responding with 500.', extra={'event': LogEvent.DATA_STORE_ERROR})
        return response_500(message='failed to update link', error_code=error.error_code)

    # 5- Respond with the updated link
    logger.info('Updated link. Responding with 200.', extra={'event': LogEvent.LINK_UPDATED, 'link_id': link_id})
    return json_response(200, link.to_dict())
