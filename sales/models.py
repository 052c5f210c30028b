from decimal import Decimal, ROUND_HALF_UP

from django.db import models


CENTS = Decimal('0.01')


def line_total(quantity, unit_price, discount_percentage):
    """Exact quantity × unit_price × (1 − discount/100), not rounded"""
    quantity = Decimal(str(quantity))
    unit_price = Decimal(str(unit_price))
    discount = Decimal(str(discount_percentage or 0))
    total = quantity * unit_price * (Decimal('1') - discount / Decimal('100'))
    return total


def to_cents(amount):
    return Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)


class Product(models.Model):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    category = models.CharField(max_length=100, blank=True, null=True)
    price = models.DecimalField(max_digits=18, decimal_places=2)
    currency = models.CharField(max_length=10, default='IRR')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        ordering = ['name']

    def __str__(self):
        return self.name


class Deal(models.Model):
    STAGE_CHOICES = [
        ('new_lead', 'New Lead'),
        ('contacted', 'Contacted'),
        ('needs_analysis', 'Needs Analysis'),
        ('proposal', 'Proposal'),
        ('negotiation', 'Negotiation'),
        ('closed_won', 'Closed Won'),
        ('closed_lost', 'Closed Lost'),
    ]

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    customer = models.ForeignKey('customers.Customer', on_delete=models.CASCADE, related_name='deals')
    assigned_to = models.ForeignKey(
        'users.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='deals'
    )
    stage = models.CharField(max_length=20, choices=STAGE_CHOICES, default='new_lead')
    total_value = models.DecimalField(max_digits=18, decimal_places=2, default=0)
    currency = models.CharField(max_length=10, default='IRR')
    probability = models.PositiveSmallIntegerField(default=0, help_text="Win probability in percent")
    expected_close_date = models.DateField(blank=True, null=True)
    actual_close_date = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'deals'
        ordering = ['-created_at']

    def __str__(self):
        return self.title


class Sale(models.Model):
    PAYMENT_STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('partial', 'Partial'),
        ('paid', 'Paid'),
        ('refunded', 'Refunded'),
    ]

    deal = models.ForeignKey(Deal, on_delete=models.PROTECT, related_name='sales')
    customer = models.ForeignKey('customers.Customer', on_delete=models.PROTECT, related_name='sales')
    customer_name = models.CharField(max_length=255)
    total_amount = models.DecimalField(max_digits=18, decimal_places=2, default=0)
    currency = models.CharField(max_length=10, default='IRR')
    payment_status = models.CharField(max_length=20, choices=PAYMENT_STATUS_CHOICES, default='pending')
    payment_method = models.CharField(max_length=50, blank=True, null=True)
    delivery_date = models.DateField(blank=True, null=True)
    payment_due_date = models.DateField(blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    invoice_number = models.CharField(max_length=100, blank=True, null=True)
    sales_person = models.ForeignKey(
        'users.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='sales'
    )
    sales_person_name = models.CharField(max_length=255, blank=True, default='')
    sale_date = models.DateTimeField(auto_now_add=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'sales'
        ordering = ['-sale_date']

    def __str__(self):
        return f"Sale #{self.pk} - {self.customer_name}"

    def recalculate_total(self):
        """Sum the exact line values of the items, round once and store the result"""
        items = SaleItem.objects.filter(sale=self).values_list('quantity', 'unit_price', 'discount_percentage')
        self.total_amount = to_cents(sum((line_total(*item) for item in items), Decimal('0')))
        self.save(update_fields=['total_amount', 'updated_at'])
        return self.total_amount


class SaleItem(models.Model):
    sale = models.ForeignKey(Sale, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name='sale_items')
    product_name = models.CharField(max_length=255)
    quantity = models.DecimalField(max_digits=12, decimal_places=2, default=1)
    unit_price = models.DecimalField(max_digits=18, decimal_places=2)
    discount_percentage = models.DecimalField(max_digits=5, decimal_places=2, default=0)
    total_price = models.DecimalField(max_digits=18, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'sale_items'
        ordering = ['id']

    def __str__(self):
        return f"{self.product_name} x {self.quantity}"

    def save(self, *args, **kwargs):
        self.total_price = to_cents(line_total(self.quantity, self.unit_price, self.discount_percentage))
        super().save(*args, **kwargs)
