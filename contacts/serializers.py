from rest_framework import serializers

from .models import Company, Contact, ContactActivity


INDIVIDUAL = 'individual'


class CompanySerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=255, error_messages={
        'required': 'نام شرکت الزامی است',
        'blank': 'نام شرکت الزامی است',
    })
    contacts_count = serializers.IntegerField(read_only=True, default=0)
    assigned_user_name = serializers.CharField(source='assigned_to.name', read_only=True, default=None)

    class Meta:
        model = Company
        fields = [
            'id', 'name', 'industry', 'size', 'website', 'phone', 'email', 'address', 'city',
            'country', 'postal_code', 'description', 'status', 'annual_revenue', 'employee_count',
            'founded_year', 'rating', 'assigned_to', 'assigned_user_name', 'created_by',
            'contacts_count', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_by', 'created_at', 'updated_at']

    def validate_name(self, value):
        name = value.strip()
        qs = Company.objects.filter(name=name)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError('شرکتی با این نام قبلاً ثبت شده است')
        return name

    def validate_rating(self, value):
        if value is not None and not 1 <= value <= 5:
            raise serializers.ValidationError('امتیاز باید بین ۱ تا ۵ باشد')
        return value


class CompanyBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Company
        fields = ['id', 'name', 'industry', 'website']


class ContactSerializer(serializers.ModelSerializer):
    company = CompanyBriefSerializer(read_only=True)
    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = Contact
        fields = [
            'id', 'company', 'first_name', 'last_name', 'full_name', 'job_title', 'department',
            'email', 'phone', 'mobile', 'linkedin_url', 'twitter_url', 'address', 'city',
            'country', 'source', 'status', 'is_primary', 'notes', 'last_contact_date',
            'assigned_to', 'created_by', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class ContactWriteSerializer(serializers.ModelSerializer):
    """
    Create/update payload. ``company_id`` (or ``customer_id``) set to
    ``individual`` or left empty stores the contact without a company.
    """
    NAME_REQUIRED = 'نام و نام خانوادگی الزامی است'

    first_name = serializers.CharField(max_length=100, error_messages={'required': NAME_REQUIRED, 'blank': NAME_REQUIRED})
    last_name = serializers.CharField(max_length=100, error_messages={'required': NAME_REQUIRED, 'blank': NAME_REQUIRED})
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    company_id = serializers.CharField(required=False, allow_blank=True, allow_null=True, write_only=True)
    customer_id = serializers.CharField(required=False, allow_blank=True, allow_null=True, write_only=True)

    class Meta:
        model = Contact
        fields = [
            'first_name', 'last_name', 'job_title', 'department', 'email', 'phone', 'mobile',
            'linkedin_url', 'twitter_url', 'address', 'city', 'country', 'source', 'status',
            'is_primary', 'notes', 'assigned_to', 'company_id', 'customer_id',
        ]

    def validate_email(self, value):
        if not value:
            return None
        email = value.strip().lower()
        qs = Contact.objects.filter(email=email)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError('مخاطبی با این ایمیل قبلاً ثبت شده است')
        return email

    def validate(self, attrs):
        provided = 'company_id' in attrs or 'customer_id' in attrs
        raw_company = attrs.pop('customer_id', None) or attrs.pop('company_id', None)
        attrs.pop('company_id', None)

        if provided:
            if not raw_company or raw_company == INDIVIDUAL:
                attrs['company'] = None
            else:
                company = Company.objects.filter(pk=raw_company).first() if str(raw_company).isdigit() else None
                if company is None:
                    raise serializers.ValidationError({'company_id': 'شرکت یافت نشد'})
                attrs['company'] = company
        return attrs


class ContactActivitySerializer(serializers.ModelSerializer):
    REQUIRED = 'نوع فعالیت و عنوان الزامی است'

    activity_type = serializers.ChoiceField(choices=ContactActivity.TYPE_CHOICES, error_messages={'required': REQUIRED})
    title = serializers.CharField(max_length=255, error_messages={'required': REQUIRED, 'blank': REQUIRED})
    created_by_name = serializers.CharField(source='created_by.name', read_only=True, default=None)

    class Meta:
        model = ContactActivity
        fields = [
            'id', 'contact', 'company', 'activity_type', 'title', 'description', 'status', 'priority',
            'due_date', 'completed_at', 'duration_minutes', 'outcome', 'next_action',
            'created_by', 'created_by_name', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'contact', 'company', 'completed_at', 'created_by', 'created_at', 'updated_at']
