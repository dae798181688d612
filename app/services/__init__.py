# Services Package

# Lazy imports to avoid circular dependencies
def get_amadeus_service():
    from app.services.amadeus_service import amadeus_service
    return amadeus_service

def get_hotel_service():
    from app.services.hotel_service import hotel_service
    return hotel_service

def get_flight_service():
    from app.services.flight_service import flight_service
    return flight_service

def get_booking_service():
    from app.services.booking_service import booking_service
    return booking_service

def get_payment_service():
    from app.services.payment_service import payment_service
    return payment_service
