from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse

from storefront.errors import OrderError
from storefront.logging_config import configure_logging
from storefront.routers import storefront

configure_logging()

app = FastAPI(title='Storefront Orders')

app.include_router(storefront.router)


@app.exception_handler(OrderError)
async def order_error_handler(request: Request, exc: OrderError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={'error': 'Invalid order payload', 'details': jsonable_encoder(exc.errors())},
    )


@app.get('/health', response_class=PlainTextResponse)
def health() -> str:
    return 'ok'


@app.get('/robots.txt', response_class=PlainTextResponse)
def robots_txt() -> str:
    return 'User-agent: *\nDisallow: /api/\n'
