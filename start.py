"""Container entrypoint: reads PORT and starts uvicorn."""
import os

port = int(os.environ.get("PORT", 8000))
print(f"Starting adslot on port {port}", flush=True)

import uvicorn
uvicorn.run(
    "adslot.web.app:create_app",
    host="0.0.0.0",
    port=port,
    factory=True,
    log_level="info",
)
