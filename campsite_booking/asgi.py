# campsite_booking/asgi.py
# Entry point for ASGI servers: `uvicorn campsite_booking.asgi:app`
from campsite_booking.main import create_app

app = create_app()
