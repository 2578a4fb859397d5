from fastapi import FastAPI, Request
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse

from screen2code.api import ApiModelRegistry
from screen2code.api.generation.router import router as generation_router
from screen2code.api.preview.router import router as preview_router
from screen2code.core.exceptions import (
    ConfigurationError,
    ImageNotFoundError,
    InvocationErrorKind,
    ModelInvocationError,
    PreviewUnavailableError,
    RefinementExhaustedError,
)
from screen2code.utils import FancyLogger

LOG = FancyLogger(__name__)

app = FastAPI(title="screen2code", description="Generate UI code from screenshots")
app.include_router(generation_router, prefix="/api/v1")
app.include_router(preview_router, prefix="/api/v1")


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    return JSONResponse(status_code=400, content={"error": str(exc), "kind": "configuration"})


@app.exception_handler(ImageNotFoundError)
async def image_not_found_handler(request: Request, exc: ImageNotFoundError):
    return JSONResponse(status_code=404, content={"error": str(exc), "kind": "not_found"})


@app.exception_handler(ModelInvocationError)
async def model_invocation_error_handler(request: Request, exc: ModelInvocationError):
    status_code = 429 if exc.kind == InvocationErrorKind.RATE_LIMIT else 502
    return JSONResponse(
        status_code=status_code,
        content={"error": str(exc), "kind": exc.kind.value, "retryable": exc.retryable},
    )


@app.exception_handler(PreviewUnavailableError)
async def preview_unavailable_handler(request: Request, exc: PreviewUnavailableError):
    return JSONResponse(
        status_code=503,
        content={"error": str(exc), "kind": "preview", "upstream_status": exc.status_code},
    )


@app.exception_handler(RefinementExhaustedError)
async def refinement_exhausted_handler(request: Request, exc: RefinementExhaustedError):
    return JSONResponse(
        status_code=422,
        content={
            "error": str(exc),
            "kind": "refinement_exhausted",
            "issues": exc.issues,
            "code": exc.code.model_dump(mode="json") if exc.code is not None else None,
        },
    )


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    schema = get_openapi(title=app.title, version="0.1.0", description=app.description, routes=app.routes)
    components = schema.setdefault("components", {}).setdefault("schemas", {})
    for name, model in ApiModelRegistry.models().items():
        components.setdefault(name, model.model_json_schema(ref_template="#/components/schemas/{model}"))
    app.openapi_schema = schema
    return schema


app.openapi = custom_openapi
