from rest_framework import serializers

from access.policy import policy
from .models import User


REQUIRED_USER_FIELDS = 'نام، ایمیل، رمز عبور و نقش الزامی است'


class UserSerializer(serializers.ModelSerializer):
    """Read representation; never exposes the password hash"""

    class Meta:
        model = User
        fields = [
            'id', 'name', 'email', 'role', 'status', 'team', 'phone', 'avatar_url',
            'last_login', 'last_active', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class CoworkerSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'role', 'team', 'avatar_url', 'last_active']
        read_only_fields = fields


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField(error_messages={'required': 'ایمیل و رمز عبور الزامی است', 'blank': 'ایمیل و رمز عبور الزامی است'})
    password = serializers.CharField(error_messages={'required': 'ایمیل و رمز عبور الزامی است', 'blank': 'ایمیل و رمز عبور الزامی است'})

    def validate_email(self, value):
        return value.strip().lower()


class UserCreateSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, error_messages={'required': REQUIRED_USER_FIELDS, 'blank': REQUIRED_USER_FIELDS})
    name = serializers.CharField(error_messages={'required': REQUIRED_USER_FIELDS, 'blank': REQUIRED_USER_FIELDS})
    email = serializers.EmailField(error_messages={
        'required': REQUIRED_USER_FIELDS,
        'blank': REQUIRED_USER_FIELDS,
        'invalid': 'فرمت ایمیل نامعتبر است',
    })
    role = serializers.CharField(error_messages={'required': REQUIRED_USER_FIELDS, 'blank': REQUIRED_USER_FIELDS})

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'password', 'role', 'status', 'team', 'phone', 'avatar_url']
        read_only_fields = ['id']

    def validate_email(self, value):
        email = value.strip().lower()
        if User.objects.filter(email=email).exists():
            raise serializers.ValidationError('کاربری با این ایمیل قبلاً ثبت شده است')
        return email

    def validate_password(self, value):
        if len(value) < 6:
            raise serializers.ValidationError('رمز عبور باید حداقل ۶ کاراکتر باشد')
        return value

    def validate_role(self, value):
        if value not in policy.assignable_roles:
            raise serializers.ValidationError('نقش انتخاب شده معتبر نیست')
        return value

    def create(self, validated_data):
        password = validated_data.pop('password')
        user = User(**validated_data)
        user.set_password(password)
        user.save()
        return user


class UserUpdateSerializer(serializers.ModelSerializer):
    """
    Update by the user themselves or by a manager. The view rejects ``role``
    and ``status`` changes coming from non-managers.
    """

    email = serializers.EmailField(required=False, error_messages={'invalid': 'فرمت ایمیل نامعتبر است'})

    class Meta:
        model = User
        fields = ['name', 'email', 'role', 'status', 'team', 'phone', 'avatar_url']

    def validate_email(self, value):
        email = value.strip().lower()
        qs = User.objects.filter(email=email)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError('کاربری با این ایمیل قبلاً ثبت شده است')
        return email

    def validate_role(self, value):
        if value not in policy.assignable_roles and value not in policy.manager_roles:
            raise serializers.ValidationError('نقش انتخاب شده معتبر نیست')
        return value


class ProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'role', 'status', 'team', 'phone', 'avatar_url', 'last_login', 'created_at']
        read_only_fields = ['id', 'email', 'role', 'status', 'last_login', 'created_at']


class PasswordChangeSerializer(serializers.Serializer):
    current_password = serializers.CharField()
    new_password = serializers.CharField()

    def validate_current_password(self, value):
        if not self.context['user'].check_password(value):
            raise serializers.ValidationError('رمز عبور فعلی اشتباه است')
        return value

    def validate_new_password(self, value):
        if len(value) < 6:
            raise serializers.ValidationError('رمز عبور باید حداقل ۶ کاراکتر باشد')
        return value
