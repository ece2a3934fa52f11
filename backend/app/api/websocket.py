import asyncio
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from ..core.errors import MissingCredentialsError, RecipeFetchError
from ..services.converter import RecipeConverter
from .deps import get_converter

log = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1")


@router.websocket("/ws/convert")
async def convert_websocket(ws: WebSocket, converter: RecipeConverter = Depends(get_converter)):
    """
    Streams conversion progress. The client sends ``{"url": ...}`` and receives
    ``recipe``, ``classified``, ``match`` and ``simplified`` events followed by
    a ``result`` or ``error`` message. Disconnecting cancels the conversion.
    """
    await ws.accept()
    log.info("✅ Conversion WebSocket accepted")

    async def send_event(event: dict):
        if ws.application_state == WebSocketState.CONNECTED:
            await ws.send_json(event)
        else:
            log.warning(f"❌ WebSocket not connected, '{event.get('type')}' event dropped")

    try:
        message = await ws.receive_json()
    except WebSocketDisconnect:
        log.info("👋 Client left before sending a recipe URL")
        return
    except ValueError:
        await ws.send_json({"type": "error", "message": "Expected a JSON message"})
        await ws.close()
        return

    url = (message or {}).get("url") if isinstance(message, dict) else None
    if not url:
        await ws.send_json({"type": "error", "message": "Missing recipe `url`"})
        await ws.close()
        return

    log.info(f"📝 Converting {url}")
    conversion = asyncio.create_task(converter.convert(url, on_event=send_event))
    watcher = asyncio.create_task(ws.receive())

    try:
        done, _ = await asyncio.wait({conversion, watcher}, return_when=asyncio.FIRST_COMPLETED)
        if conversion not in done:
            # Anything from the client while converting, a disconnect included, aborts the run.
            log.info("🛑 Client interrupted conversion, cancelling")
            conversion.cancel()
            return

        result = conversion.result()
        await send_event({"type": "result", "result": result.model_dump()})
    except MissingCredentialsError as e:
        log.error(f"❌ {e}")
        await send_event({"type": "error", "message": str(e)})
    except RecipeFetchError:
        await send_event({"type": "error", "message": "Failed to fetch recipe."})
    finally:
        watcher.cancel()
        if not conversion.done():
            conversion.cancel()

    if ws.application_state == WebSocketState.CONNECTED:
        await ws.close()
