from parking_management.api.v1.views.auth import (  # noqa: F401
    LoginView,
    LogoutView,
    MeView,
    RegisterView,
    ResetPasswordView,
)
from parking_management.api.v1.views.park import ParkViewSet  # noqa: F401
from parking_management.api.v1.views.parking_request import (  # noqa: F401
    OwnerParkingRequestViewSet,
    ParkingRequestViewSet,
)
from parking_management.api.v1.views.spot import SpotViewSet  # noqa: F401
