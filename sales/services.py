"""
Recording sales: one transaction writes the sale, its items and, for paid
sales, closes the deal as won.
"""
import logging

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from customers.models import Customer
from .models import Deal, Product, Sale, SaleItem

logger = logging.getLogger(__name__)

SALE_FIELDS = (
    'currency', 'payment_status', 'payment_method', 'delivery_date',
    'payment_due_date', 'notes', 'invoice_number',
)


def _load_products(items):
    ids = {item['product_id'] for item in items}
    products = Product.objects.in_bulk(ids)
    for item in items:
        if item['product_id'] not in products:
            raise ValidationError(f"محصول با شناسه {item['product_id']} یافت نشد")
    return products


def record_sale(user, data, sale=None):
    """
    Create a sale (or replace an existing one's fields and items) from
    validated ``SaleWriteSerializer`` data. The total is always computed from
    the items, never taken from the client.
    """
    customer = Customer.objects.filter(pk=data['customer_id']).first()
    if customer is None:
        raise NotFound('مشتری یافت نشد')

    deal = Deal.objects.filter(pk=data['deal_id']).first()
    if deal is None:
        raise NotFound('معامله یافت نشد')

    products = _load_products(data['items'])

    with transaction.atomic():
        if sale is None:
            sale = Sale(sales_person=user, sales_person_name=user.name)
        sale.deal = deal
        sale.customer = customer
        sale.customer_name = customer.name
        for field in SALE_FIELDS:
            if field in data:
                setattr(sale, field, data[field])
        sale.save()

        SaleItem.objects.filter(sale=sale).delete()
        for item in data['items']:
            product = products[item['product_id']]
            unit_price = item.get('unit_price')
            SaleItem.objects.create(
                sale=sale,
                product=product,
                product_name=product.name,
                quantity=item['quantity'],
                unit_price=product.price if unit_price is None else unit_price,
                discount_percentage=item.get('discount_percentage') or 0,
            )
        sale.recalculate_total()

        if sale.payment_status == 'paid' and deal.stage != 'closed_won':
            Deal.objects.filter(pk=deal.pk).update(
                stage='closed_won',
                actual_close_date=timezone.now(),
                updated_at=timezone.now(),
            )

    logger.info("Sale %s recorded by %s, total %s %s", sale.pk, user.pk, sale.total_amount, sale.currency)
    return Sale.objects.select_related('deal').prefetch_related('items').get(pk=sale.pk)
