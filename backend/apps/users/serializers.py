from rest_framework import serializers

from .models import User, normalize_phone

# =============================================================================
# E-COMMERCE ARCHITECTURE: User Authentication & Registration
# =============================================================================
# STATUS: Completo
# PURPOSE: Registro y autenticación de clientes de la tienda
# BUSINESS LOGIC: Validación de passwords, campos únicos (email, username, teléfono)
# =============================================================================

class UserRegistrationSerializer(serializers.ModelSerializer):
    # Campos para la validacion de contrasena
    password = serializers.CharField(write_only=True, required=True, min_length=8)
    password_confirm = serializers.CharField(write_only=True)

    class Meta:
        model = User
        fields = ['email', 'username', 'first_name', 'last_name',
                  'password', 'password_confirm', 'phone', 'address', 'city']
        extra_kwargs = {'phone': {'validators': []}}

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email already in use")
        return value

    def validate_username(self, value):
        if User.objects.filter(username=value).exists():
            raise serializers.ValidationError("Username already in use")
        return value

    def validate_phone(self, value):
        phone = normalize_phone(value)
        if phone and User.objects.filter(phone=phone).exists():
            raise serializers.ValidationError("Phone number already in use")
        return phone or None

    def validate(self, attrs):
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({"password": "Password fields didn't match."})
        return attrs

    def create(self, validated_data):
        validated_data.pop('password_confirm')
        # el registro público siempre crea clientes
        validated_data['role'] = 'customer'
        user = User.objects.create_user(**validated_data)
        return user


class LoginSerializer(serializers.Serializer):
    """Serializer para login con email, username o teléfono"""
    login = serializers.CharField(required=False)
    email = serializers.EmailField(required=False)
    username = serializers.CharField(required=False)
    phone = serializers.CharField(required=False)
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        login_field = (attrs.get('login') or attrs.get('email')
                       or attrs.get('username') or attrs.get('phone'))
        if not login_field:
            raise serializers.ValidationError("Must include 'login', 'email', 'username' or 'phone'")
        if not attrs.get('password'):
            raise serializers.ValidationError("Password is required")
        attrs['login_field'] = login_field
        return attrs


class UserSerializer(serializers.ModelSerializer):
    full_name = serializers.ReadOnlyField()
    display_name = serializers.ReadOnlyField()
    favorites_count = serializers.IntegerField(source='favorites.count', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'email', 'username', 'first_name', 'last_name', 'full_name',
                  'display_name', 'role', 'phone', 'address', 'city', 'created_at', 'favorites_count']
        read_only_fields = ['id', 'email', 'role', 'created_at']
        extra_kwargs = {'phone': {'validators': []}}

    def validate_phone(self, value):
        phone = normalize_phone(value)
        if phone and User.objects.filter(phone=phone).exclude(pk=getattr(self.instance, 'pk', None)).exists():
            raise serializers.ValidationError("Phone number already in use")
        return phone or None
