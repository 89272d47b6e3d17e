from rest_framework import serializers

from parking_management.core.models import Role, User


class UserSummarySerializer(serializers.ModelSerializer):

    class Meta:
        model = User
        fields = ('id', 'name', 'email',)


class UserSerializer(serializers.ModelSerializer):

    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = User
        fields = ('id', 'email', 'firstname', 'lastname', 'name', 'role', 'createdAt',)


class RegisterSerializer(serializers.Serializer):

    email = serializers.EmailField(error_messages={
        'required': 'Please provide a valid email',
        'invalid': 'Please provide a valid email',
    })
    password = serializers.CharField(write_only=True, min_length=8, error_messages={
        'required': 'Password is required',
        'min_length': 'Password must be at least 8 characters long',
    })
    firstname = serializers.CharField(required=False, allow_blank=True, max_length=100, default='')
    lastname = serializers.CharField(required=False, allow_blank=True, max_length=100, default='')
    role = serializers.ChoiceField(choices=(Role.USER, Role.OWNER), default=Role.USER, error_messages={
        'invalid_choice': 'Role must be either USER or OWNER',
    })


class LoginSerializer(serializers.Serializer):

    email = serializers.EmailField(error_messages={
        'required': 'Please provide a valid email',
        'invalid': 'Please provide a valid email',
    })
    password = serializers.CharField(write_only=True, error_messages={
        'required': 'Password is required',
        'blank': 'Password is required',
    })


class ResetPasswordSerializer(serializers.Serializer):

    password = serializers.CharField(write_only=True, min_length=8, error_messages={
        'required': 'Password is required',
        'min_length': 'Password must be at least 8 characters long',
    })
