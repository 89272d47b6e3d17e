from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.views import APIView

from parking_management.api.responses import envelope
from parking_management.api.v1.serializers import (
    LoginSerializer,
    RegisterSerializer,
    ResetPasswordSerializer,
    UserSerializer,
)
from parking_management.core.auth import accounts
from parking_management.core.auth.tokens import block_token, issue_token


class RegisterView(APIView):

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def post(self, request: Request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = accounts.register_user(**serializer.validated_data)
        return envelope(
            UserSerializer(user).data,
            message='User registered successfully',
            status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):

    permission_classes = (AllowAny,)

    def post(self, request: Request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = accounts.authenticate_user(**serializer.validated_data)
        data = UserSerializer(user).data
        data['token'] = issue_token(user)
        return envelope(data, message='User logged in successfully')


class MeView(APIView):

    def get(self, request: Request):
        return envelope(UserSerializer(request.user).data)


class LogoutView(APIView):

    def post(self, request: Request):
        block_token(request.auth)
        return envelope(message='User logged out successfully')


class ResetPasswordView(APIView):

    def post(self, request: Request):
        serializer = ResetPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        accounts.reset_password(request.user, serializer.validated_data['password'])
        return envelope(message='The password updated successfully!')
