from dataclasses import dataclass

from fastapi import Request


@dataclass(frozen=True)
class RequestMeta:
    ip: str | None = None
    user_agent: str | None = None
    referrer: str | None = None
    url: str | None = None


def get_client_ip(request: Request) -> str | None:
    forwarded_for = request.headers.get('x-forwarded-for')
    if forwarded_for:
        return forwarded_for.split(',')[0].strip()
    real_ip = request.headers.get('x-real-ip')
    if real_ip:
        return real_ip.strip()
    if request.client:
        return request.client.host
    return None


def get_request_meta(request: Request) -> RequestMeta:
    return RequestMeta(
        ip=get_client_ip(request),
        user_agent=request.headers.get('user-agent'),
        referrer=request.headers.get('referer'),
        url=str(request.url),
    )
