from decimal import Decimal

from rest_framework import serializers

from .models import Product, Deal, Sale, SaleItem


DEAL_REQUIRED = 'اطلاعات معامله کامل نیست'


class ProductSerializer(serializers.ModelSerializer):
    REQUIRED = 'نام و قیمت محصول الزامی است'

    name = serializers.CharField(max_length=255, error_messages={'required': REQUIRED, 'blank': REQUIRED})
    price = serializers.DecimalField(max_digits=18, decimal_places=2, min_value=Decimal('0'), error_messages={'required': REQUIRED})

    class Meta:
        model = Product
        fields = ['id', 'name', 'description', 'category', 'price', 'currency', 'is_active', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class DealSerializer(serializers.ModelSerializer):
    title = serializers.CharField(max_length=255, error_messages={'required': DEAL_REQUIRED, 'blank': DEAL_REQUIRED})
    customer_name = serializers.CharField(source='customer.name', read_only=True)
    assigned_user_name = serializers.CharField(source='assigned_to.name', read_only=True, default=None)
    stage_display = serializers.CharField(source='get_stage_display', read_only=True)

    class Meta:
        model = Deal
        fields = [
            'id', 'title', 'description', 'customer', 'customer_name', 'assigned_to', 'assigned_user_name',
            'stage', 'stage_display', 'total_value', 'currency', 'probability', 'expected_close_date',
            'actual_close_date', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'actual_close_date', 'created_at', 'updated_at']
        extra_kwargs = {
            'customer': {'error_messages': {'required': DEAL_REQUIRED, 'does_not_exist': 'مشتری یافت نشد'}},
        }

    def validate_probability(self, value):
        if value > 100:
            raise serializers.ValidationError('احتمال موفقیت باید بین ۰ تا ۱۰۰ باشد')
        return value


class SaleItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = SaleItem
        fields = ['id', 'product', 'product_name', 'quantity', 'unit_price', 'discount_percentage', 'total_price']
        read_only_fields = fields


class SaleItemInputSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    quantity = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'))
    unit_price = serializers.DecimalField(max_digits=18, decimal_places=2, min_value=Decimal('0'), required=False)
    discount_percentage = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal('0'), max_value=Decimal('100'), default=Decimal('0')
    )


class SaleSerializer(serializers.ModelSerializer):
    items = SaleItemSerializer(many=True, read_only=True)
    deal_title = serializers.CharField(source='deal.title', read_only=True)

    class Meta:
        model = Sale
        fields = [
            'id', 'deal', 'deal_title', 'customer', 'customer_name', 'total_amount', 'currency',
            'payment_status', 'payment_method', 'delivery_date', 'payment_due_date', 'notes',
            'invoice_number', 'sales_person', 'sales_person_name', 'sale_date', 'items',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class SaleWriteSerializer(serializers.Serializer):
    INCOMPLETE = 'اطلاعات فروش ناقص است'

    deal_id = serializers.IntegerField(error_messages={'required': INCOMPLETE, 'null': INCOMPLETE})
    customer_id = serializers.IntegerField(error_messages={'required': INCOMPLETE, 'null': INCOMPLETE})
    items = SaleItemInputSerializer(many=True, allow_empty=False, error_messages={
        'required': 'حداقل یک محصول باید انتخاب شود',
        'empty': 'حداقل یک محصول باید انتخاب شود',
    })
    currency = serializers.CharField(max_length=10, default='IRR')
    payment_status = serializers.ChoiceField(choices=Sale.PAYMENT_STATUS_CHOICES, default='pending')
    payment_method = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    delivery_date = serializers.DateField(required=False, allow_null=True)
    payment_due_date = serializers.DateField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    invoice_number = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
