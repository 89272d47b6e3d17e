from parking_management.api.v1.serializers.park import (  # noqa: F401
    ParkApprovalSerializer,
    ParkDetailSerializer,
    ParkSerializer,
)
from parking_management.api.v1.serializers.parking_request import (  # noqa: F401
    ParkingRequestCreateSerializer,
    ParkingRequestSerializer,
    ParkingRequestUpdateSerializer,
    RequestStatusSerializer,
)
from parking_management.api.v1.serializers.spot import (  # noqa: F401
    AvailabilityQuerySerializer,
    SpotSerializer,
)
from parking_management.api.v1.serializers.user import (  # noqa: F401
    LoginSerializer,
    RegisterSerializer,
    ResetPasswordSerializer,
    UserSerializer,
)
