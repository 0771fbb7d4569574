"""Process entrypoint: load settings once, configure logging/tracing, serve.

Run with `uvicorn payorder.services.api.main:app` or
`python -m payorder.services.api.main`.
"""

import uvicorn

from payorder.common.config import load_settings
from payorder.common.logging import configure_logging
from payorder.common.startup import log_startup_config
from payorder.common.tracing import instrument_app, setup_tracing
from payorder.services.api.app import create_app

settings = load_settings()
configure_logging(settings.service_name, settings.log_level)
if settings.tracing_enabled:
    setup_tracing(settings)
log_startup_config(
    settings,
    [
        "gateway_mode",
        "razorpay_api_url",
        "razorpay_key_id",
        "razorpay_key_secret",
        "default_currency",
        "port",
    ],
)
app = create_app(settings)
if settings.tracing_enabled:
    instrument_app(app)


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
