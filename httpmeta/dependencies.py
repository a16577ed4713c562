import logging

from fastapi import HTTPException, Request, status

from httpmeta.quality_values import MalformedPreferenceEntry, QualityValue
from httpmeta.request_meta import client_ip_from_request, quality_values_from_request

logger = logging.getLogger('httpmeta.dependencies')


def get_client_ip(request: Request) -> str:
    return client_ip_from_request(request)


def get_accepted_types(request: Request) -> list[QualityValue]:
    try:
        return quality_values_from_request(request)
    except MalformedPreferenceEntry as exc:
        logger.info('accept_header_rejected path=%s header=%r', request.url.path, exc.header_value)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Cabecera Accept invalida') from exc
