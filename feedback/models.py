from django.db import models


class Feedback(models.Model):
    TYPE_CHOICES = [
        ('csat', 'CSAT'),
        ('nps', 'NPS'),
        ('ces', 'CES'),
        ('complaint', 'Complaint'),
        ('suggestion', 'Suggestion'),
        ('praise', 'Praise'),
    ]

    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('in_progress', 'In Progress'),
        ('resolved', 'Resolved'),
        ('closed', 'Closed'),
    ]

    PRIORITY_CHOICES = [
        ('low', 'Low'),
        ('medium', 'Medium'),
        ('high', 'High'),
    ]

    customer = models.ForeignKey('customers.Customer', on_delete=models.CASCADE, related_name='feedback')
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    title = models.CharField(max_length=255, blank=True, null=True)
    comment = models.TextField()
    score = models.DecimalField(max_digits=4, decimal_places=1, blank=True, null=True)
    product = models.CharField(max_length=255, blank=True, null=True)
    channel = models.CharField(max_length=50, default='website')
    category = models.CharField(max_length=100, blank=True, null=True)
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default='medium')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending')
    created_by = models.ForeignKey(
        'users.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='recorded_feedback'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'feedback'
        ordering = ['-created_at']
        verbose_name_plural = 'Feedback'

    def __str__(self):
        return f"{self.get_type_display()} - {self.customer_id}"
