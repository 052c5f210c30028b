from django.db import models


class Interaction(models.Model):
    TYPE_CHOICES = [
        ('call', 'Call'),
        ('email', 'Email'),
        ('meeting', 'Meeting'),
        ('chat', 'Chat'),
        ('sms', 'SMS'),
        ('website', 'Website'),
        ('social', 'Social Media'),
    ]

    DIRECTION_CHOICES = [
        ('inbound', 'Inbound'),
        ('outbound', 'Outbound'),
    ]

    customer = models.ForeignKey('customers.Customer', on_delete=models.CASCADE, related_name='interactions')
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    subject = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    outcome = models.CharField(max_length=255, blank=True, null=True)
    direction = models.CharField(max_length=10, choices=DIRECTION_CHOICES, default='outbound')
    channel = models.CharField(max_length=50, default='system')
    date = models.DateTimeField()
    duration = models.PositiveIntegerField(blank=True, null=True, help_text="Minutes")
    performed_by = models.ForeignKey(
        'users.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='interactions'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'interactions'
        ordering = ['-date']

    def __str__(self):
        return self.subject
