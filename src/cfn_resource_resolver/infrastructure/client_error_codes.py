from botocore.exceptions import ClientError

THROTTLING_ERROR_CODES = frozenset({
    'Throttling',
    'ThrottlingException',
    'ThrottledException',
    'RequestThrottledException',
    'TooManyRequestsException',
    'RequestLimitExceeded',
    'ServiceUnavailable',
    'InternalFailure',
})

AUTHORISATION_ERROR_CODES = frozenset({
    'AccessDenied',
    'AccessDeniedException',
    'UnauthorizedOperation',
    'UnrecognizedClientException',
    'InvalidClientTokenId',
    'ExpiredToken',
    'ExpiredTokenException',
    'SignatureDoesNotMatch',
})


def error_code_of(client_error: ClientError) -> str:
    # noinspection PyUnresolvedReferences
    return client_error.response.get('Error', {}).get('Code', '')


def error_message_of(client_error: ClientError) -> str:
    # noinspection PyUnresolvedReferences
    return client_error.response.get('Error', {}).get('Message', str(client_error))
