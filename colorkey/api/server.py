import logging

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from colorkey import __version__
from colorkey.config import (
    DEFAULT_EXPORT_FILENAME,
    DEFAULT_MAX_DIMENSION,
    DEFAULT_TARGET_COLOR,
    DEFAULT_TOLERANCE,
    DEFAULT_WORKERS,
    MAX_TOLERANCE,
    MAX_UPLOAD_BYTES,
)
from colorkey.exceptions import InvalidInput
from colorkey.log import setup_logging
from colorkey.session import EditorSession

logger = logging.getLogger(__name__)

app = FastAPI(title="Color Key Background Removal API", version=__version__)

setup_logging()


def process_image(image_data: bytes, options: dict) -> bytes:
    """
    Remove a background color from raw image bytes.

    Args:
        image_data: Encoded image bytes
        options: Dict with optional keys:
            - color: str - Hex color to remove (default: #ffffff)
            - tolerance: float - Match distance (default: DEFAULT_TOLERANCE)
            - max_dimension: int - Canvas fit limit, 0 for full size

    Returns:
        PNG bytes with matching pixels made transparent
    """
    session = EditorSession(
        target=options.get("color", DEFAULT_TARGET_COLOR),
        tolerance=options.get("tolerance", DEFAULT_TOLERANCE),
        max_dimension=options.get("max_dimension", DEFAULT_MAX_DIMENSION),
        workers=options.get("workers", DEFAULT_WORKERS),
    )
    session.load_bytes(image_data)
    session.remove_background()
    return session.result_png()


@app.post("/remove-background")
async def remove_background_endpoint(
    image: UploadFile = File(..., description="Image file"),
    color: str = Form(DEFAULT_TARGET_COLOR, description="Hex color to make transparent"),
    tolerance: float = Form(
        DEFAULT_TOLERANCE, ge=0, le=MAX_TOLERANCE, description="RGB distance tolerance"
    ),
    max_dimension: int = Form(
        DEFAULT_MAX_DIMENSION, ge=0, description="Longest output side, 0 keeps full size"
    ),
):
    """
    Make every pixel close to a color transparent and return the PNG.

    - **image**: Image file (any format Pillow can read)
    - **color**: Target color as #rrggbb
    - **tolerance**: Pixels closer than this to the target lose their opacity
    - **max_dimension**: Preview canvas size limit
    """
    if not image.content_type or not image.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="File must be an image")

    content = await image.read()
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"Image exceeds {MAX_UPLOAD_BYTES} bytes",
        )

    try:
        png = await run_in_threadpool(
            process_image,
            content,
            {"color": color, "tolerance": tolerance, "max_dimension": max_dimension},
        )
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Background removal failed")
        raise HTTPException(
            status_code=500,
            detail=f"Unexpected error: {str(e)}"
        )

    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{DEFAULT_EXPORT_FILENAME}"'},
    )


@app.get("/")
async def root():
    return {"message": "Color Key Background Removal API", "version": __version__}


@app.get("/health")
async def health():
    return {"status": "healthy"}
