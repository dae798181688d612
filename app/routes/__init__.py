# Routes Package
from app.routes.flights import router as flights_router
from app.routes.hotels import router as hotels_router
from app.routes.payments import router as payments_router
