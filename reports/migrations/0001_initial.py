# Generated manually for reports app

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('users', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='DailyReport',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('report_date', models.DateField()),
                ('persian_date', models.CharField(blank=True, max_length=10)),
                ('work_description', models.TextField()),
                ('completed_tasks', models.JSONField(blank=True, default=list, help_text='Ids of tasks finished that day')),
                ('working_hours', models.DecimalField(blank=True, decimal_places=2, max_digits=4, null=True)),
                ('challenges', models.TextField(blank=True, null=True)),
                ('achievements', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='daily_reports', to='users.user')),
            ],
            options={
                'db_table': 'daily_reports',
                'ordering': ['-report_date', '-created_at'],
            },
        ),
        migrations.AddConstraint(
            model_name='dailyreport',
            constraint=models.UniqueConstraint(fields=('user', 'report_date'), name='daily_reports_user_date_unique'),
        ),
    ]
