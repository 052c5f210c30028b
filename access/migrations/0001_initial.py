# Generated manually for access app

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('users', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Module',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Machine name, e.g. customers', max_length=100, unique=True)),
                ('display_name', models.CharField(help_text='Persian label shown in the sidebar', max_length=255)),
                ('route', models.CharField(blank=True, default='', help_text='Frontend route, e.g. /dashboard/customers', max_length=255)),
                ('icon', models.CharField(default='LayoutDashboard', max_length=100)),
                ('sort_order', models.IntegerField(default=0)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('parent', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='children', to='access.module')),
            ],
            options={
                'verbose_name': 'Module',
                'verbose_name_plural': 'Modules',
                'db_table': 'modules',
                'ordering': ['sort_order', 'display_name'],
            },
        ),
        migrations.CreateModel(
            name='UserModulePermission',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('granted', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('module', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='user_permissions', to='access.module')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='module_permissions', to='users.user')),
            ],
            options={
                'verbose_name': 'User Module Permission',
                'verbose_name_plural': 'User Module Permissions',
                'db_table': 'user_module_permissions',
            },
        ),
        migrations.AddConstraint(
            model_name='usermodulepermission',
            constraint=models.UniqueConstraint(fields=('user', 'module'), name='access_user_module_unique'),
        ),
    ]
