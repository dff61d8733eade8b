"""
Modal deployment for the Color Key Background Removal API.

Deploy with: modal deploy modal_app.py
Local dev:   modal serve modal_app.py
"""

import modal

app = modal.App("colorkey")

# Define the container image with all dependencies
image = (
    modal.Image.debian_slim(python_version="3.11")
    # System libraries needed by OpenCV
    .apt_install(
        "libgl1",
        "libglib2.0-0",
    )
    # Python dependencies
    .pip_install(
        # Core image processing
        "pillow",
        "numpy",
        "opencv-python-headless",
        # Web API
        "fastapi",
        "uvicorn[standard]",
        "python-multipart",
    )
    # Add local source code LAST (Modal adds these at container startup for faster rebuilds)
    .add_local_python_source("colorkey")
)


@app.function(
    image=image,
    timeout=120,
    scaledown_window=300,  # Keep container warm for 5 min after last request
)
@modal.asgi_app()
def web():
    """Serve the FastAPI app. Color keying is CPU-only, so no GPU is requested."""
    from colorkey.api.server import app as fastapi_app

    return fastapi_app
