from django.db import models


class Customer(models.Model):
	SEGMENT_CHOICES = [
		('enterprise', 'Enterprise'),
		('small_business', 'Small Business'),
		('individual', 'Individual'),
	]

	STATUS_CHOICES = [
		('active', 'Active'),
		('inactive', 'Inactive'),
		('follow_up', 'Follow Up'),
		('rejected', 'Rejected'),
		('prospect', 'Prospect'),
	]

	PRIORITY_CHOICES = [
		('low', 'Low'),
		('medium', 'Medium'),
		('high', 'High'),
	]

	SALES_STAGE_CHOICES = [
		('new_lead', 'New Lead'),
		('contacted', 'Contacted'),
		('needs_analysis', 'Needs Analysis'),
		('proposal', 'Proposal'),
		('negotiation', 'Negotiation'),
		('closed_won', 'Closed Won'),
		('closed_lost', 'Closed Lost'),
	]

	name = models.CharField(max_length=255)
	email = models.EmailField(blank=True, null=True)
	phone = models.CharField(max_length=20, blank=True, null=True)
	website = models.CharField(max_length=255, blank=True, null=True)
	address = models.TextField(blank=True, null=True)
	city = models.CharField(max_length=100, blank=True, null=True)
	state = models.CharField(max_length=100, blank=True, null=True)
	country = models.CharField(max_length=100, default='ایران')
	company_name = models.CharField(max_length=255, blank=True, null=True)
	industry = models.CharField(max_length=100, blank=True, null=True)
	company_size = models.CharField(max_length=50, blank=True, null=True)
	annual_revenue = models.DecimalField(max_digits=18, decimal_places=2, blank=True, null=True)
	segment = models.CharField(max_length=20, choices=SEGMENT_CHOICES, default='small_business')
	priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default='medium')
	status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='prospect')
	sales_stage = models.CharField(max_length=20, choices=SALES_STAGE_CHOICES, default='new_lead')
	assigned_to = models.ForeignKey(
		'users.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='assigned_customers'
	)
	created_by = models.ForeignKey(
		'users.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='created_customers'
	)
	notes = models.TextField(blank=True, null=True)
	last_interaction = models.DateTimeField(blank=True, null=True)
	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:
		ordering = ['-created_at']
		db_table = 'customers'

	def __str__(self) -> str:
		return self.name
