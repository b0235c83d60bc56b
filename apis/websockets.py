from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from datetime import datetime, timezone
from ws_service.manager import manager
from settings import logger
import json

router = APIRouter(tags=["websockets"])


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """
    WebSocket endpoint for board refresh notifications.

    Clients receive a `board_updated` event after every successful write and
    should re-fetch columns and tasks when it arrives.
    """
    await manager.connect(websocket)

    try:
        welcome_message = {
            "type": "connection_established",
            "message": "WebSocket connection established successfully",
            "active_connections": manager.get_connection_count()
        }
        await manager.send_to_connection(websocket, json.dumps(welcome_message))

        while True:
            data = await websocket.receive_text()

            try:
                message = json.loads(data)
            except json.JSONDecodeError:
                logger.warning("Invalid JSON received from WebSocket client", extra={
                    "data": data[:100] + "..." if len(data) > 100 else data
                })
                continue

            if message.get("type") == "ping":
                pong_response = {
                    "type": "pong",
                    "timestamp": message.get("timestamp"),
                    "server_time": datetime.now(timezone.utc).isoformat()
                }
                await manager.send_to_connection(websocket, json.dumps(pong_response))
            else:
                logger.debug("Unknown WebSocket message type", extra={
                    "message_type": message.get("type")
                })

    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.error("WebSocket connection error", extra={
            "error": str(e)
        })
    finally:
        manager.disconnect(websocket)


@router.get("/ws/stats")
async def get_websocket_stats():
    """Get WebSocket connection statistics."""
    return {
        "active_connections": manager.get_connection_count(),
        "status": "running"
    }
