import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class PersistenceError(APIException):
    """A multi-row billing write failed and was rolled back.

    The inner error message is surfaced to the caller; the API is an
    internal admin tool.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'the write was rolled back'
    default_code = 'persistence_error'


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('unhandled error in %s', context.get('view').__class__.__name__)
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    # normalize response
    if isinstance(exc, PersistenceError):
        return Response({'ok': False, 'error': {'code': 'persistence_error', 'message': str(exc.detail)}}, status=resp.status_code)
    detail = None
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    elif isinstance(resp.data, list) and len(resp.data) == 1:
        detail = str(resp.data[0])
    else:
        detail = resp.data
    return Response({'ok': False, 'error': {'code': 'api_error', 'message': detail}}, status=resp.status_code)
