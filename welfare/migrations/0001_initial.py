import cloudinary.models
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import uuid
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


def _base_fields():
    return [
        ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
        ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='When this record was created')),
        ('updated_at', models.DateTimeField(auto_now=True, help_text='When this record was last updated')),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
    ]

    operations = [
        migrations.CreateModel(
            name='User',
            fields=[
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(default=False, help_text='Designates that this user has all permissions without explicitly assigning them.', verbose_name='superuser status')),
                ('first_name', models.CharField(blank=True, max_length=150, verbose_name='first name')),
                ('last_name', models.CharField(blank=True, max_length=150, verbose_name='last name')),
                ('is_staff', models.BooleanField(default=False, help_text='Designates whether the user can log into this admin site.', verbose_name='staff status')),
                ('is_active', models.BooleanField(default=True, help_text='Designates whether this user should be treated as active. Unselect this to deactivate accounts instead of deleting them.', verbose_name='active')),
                ('date_joined', models.DateTimeField(default=django.utils.timezone.now, verbose_name='date joined')),
                ('email', models.EmailField(db_index=True, max_length=254, unique=True)),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('user_role', models.CharField(choices=[('admin', 'Administrator'), ('staff', 'Staff')], db_index=True, default='staff', max_length=20)),
                ('phone', models.CharField(blank=True, max_length=17, validators=[django.core.validators.RegexValidator(regex='^\\+?\\d{9,15}$')])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('groups', models.ManyToManyField(blank=True, related_name='welfare_user_set', to='auth.group')),
                ('user_permissions', models.ManyToManyField(blank=True, related_name='welfare_user_set', to='auth.permission')),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['user_role', 'is_active'], name='welfare_use_user_ro_5a1c2e_idx')],
            },
        ),
        migrations.CreateModel(
            name='Benefit',
            fields=_base_fields() + [
                ('name', models.CharField(max_length=150, unique=True)),
                ('description', models.TextField(blank=True)),
                ('tag', models.CharField(blank=True, max_length=50)),
            ],
            options={
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='SeniorCategory',
            fields=_base_fields() + [
                ('name', models.CharField(max_length=100, unique=True)),
                ('order', models.PositiveIntegerField(default=0)),
            ],
            options={
                'verbose_name_plural': 'Senior categories',
                'ordering': ['order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Status',
            fields=_base_fields() + [
                ('name', models.CharField(max_length=50, unique=True)),
            ],
            options={
                'verbose_name_plural': 'Statuses',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Remarks',
            fields=_base_fields() + [
                ('name', models.CharField(max_length=50, unique=True)),
                ('order', models.PositiveIntegerField(unique=True)),
            ],
            options={
                'verbose_name_plural': 'Remarks',
                'ordering': ['order'],
            },
        ),
        migrations.CreateModel(
            name='BenefitRequirement',
            fields=_base_fields() + [
                ('name', models.CharField(max_length=150)),
                ('benefit', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='requirements', to='welfare.benefit')),
            ],
            options={
                'ordering': ['benefit', 'name'],
                'constraints': [models.UniqueConstraint(fields=('benefit', 'name'), name='unique_requirement_per_benefit')],
            },
        ),
        migrations.CreateModel(
            name='GovernmentFund',
            fields=_base_fields() + [
                ('current_balance', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=15)),
                ('version', models.PositiveBigIntegerField(default=0)),
            ],
            options={
                'verbose_name': 'Government fund',
            },
        ),
        migrations.CreateModel(
            name='Transaction',
            fields=_base_fields() + [
                ('date', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=15, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('type', models.CharField(choices=[('released', 'Released'), ('pending', 'Pending')], db_index=True, max_length=10)),
                ('benefits', models.CharField(max_length=200)),
                ('category', models.CharField(max_length=100)),
                ('senior_name', models.CharField(blank=True, max_length=200, null=True)),
                ('barangay', models.CharField(blank=True, max_length=100, null=True)),
                ('description', models.TextField(blank=True, null=True)),
            ],
            options={
                'ordering': ['-date'],
                'constraints': [models.CheckConstraint(condition=models.Q(('amount__gt', 0)), name='transaction_amount_positive')],
            },
        ),
        migrations.CreateModel(
            name='FundHistory',
            fields=_base_fields() + [
                ('date', models.DateField(db_index=True)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=15, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('source', models.CharField(help_text='Where the fund came from', max_length=200)),
                ('description', models.TextField(blank=True, null=True)),
                ('receipt', cloudinary.models.CloudinaryField(blank=True, max_length=255, null=True, verbose_name='receipt')),
                ('receipt_url', models.URLField(blank=True, max_length=500, null=True)),
                ('created_by', models.ForeignKey(blank=True, help_text='User who created this record', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='%(class)s_created', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name_plural': 'Fund history',
                'ordering': ['-date', '-created_at'],
                'constraints': [models.CheckConstraint(condition=models.Q(('amount__gt', 0)), name='fund_history_amount_positive')],
            },
        ),
        migrations.CreateModel(
            name='Senior',
            fields=_base_fields() + [
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, help_text='When this record was archived (null = not archived)', null=True)),
                ('firstname', models.CharField(max_length=100)),
                ('middlename', models.CharField(blank=True, max_length=100)),
                ('lastname', models.CharField(db_index=True, max_length=100)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('age', models.CharField(blank=True, max_length=3)),
                ('birthdate', models.DateField()),
                ('gender', models.CharField(choices=[('male', 'Male'), ('female', 'Female')], max_length=10)),
                ('barangay', models.CharField(db_index=True, max_length=100)),
                ('purok', models.CharField(max_length=100)),
                ('contact_no', models.CharField(blank=True, max_length=11, validators=[django.core.validators.RegexValidator(message='Contact number must be exactly 11 digits', regex='^\\d{11}$')])),
                ('emergency_no', models.CharField(blank=True, max_length=11, validators=[django.core.validators.RegexValidator(message='Contact number must be exactly 11 digits', regex='^\\d{11}$')])),
                ('contact_person', models.CharField(blank=True, max_length=150)),
                ('contact_relationship', models.CharField(blank=True, max_length=100)),
                ('pwd', models.BooleanField(default=False, help_text='Person with disability')),
                ('low_income', models.BooleanField(default=False)),
                ('released_at', models.DateTimeField(blank=True, db_index=True, help_text='When the benefit is (to be) released', null=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='registered_seniors', to=settings.AUTH_USER_MODEL)),
                ('remarks', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='seniors', to='welfare.remarks')),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['lastname', 'firstname'], name='welfare_sen_lastnam_3c9f1a_idx'),
                    models.Index(fields=['pwd', 'low_income'], name='welfare_sen_pwd_7e2b4d_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Application',
            fields=_base_fields() + [
                ('rejection_reason', models.TextField(blank=True, null=True)),
                ('benefit', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='applications', to='welfare.benefit')),
                ('category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='applications', to='welfare.seniorcategory')),
                ('senior', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='applications', to='welfare.senior')),
                ('status', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='applications', to='welfare.status')),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['senior', 'created_at'], name='welfare_app_senior__8d4e6f_idx')],
            },
        ),
        migrations.CreateModel(
            name='RegistrationDocument',
            fields=_base_fields() + [
                ('tag', models.CharField(db_index=True, max_length=50)),
                ('file', cloudinary.models.CloudinaryField(blank=True, max_length=255, null=True, verbose_name='document')),
                ('public_id', models.CharField(blank=True, max_length=255)),
                ('file_name', models.CharField(max_length=255)),
                ('image_url', models.URLField(blank=True, max_length=500)),
                ('benefit_requirement', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='documents', to='welfare.benefitrequirement')),
                ('senior', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='documents', to='welfare.senior')),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['senior', 'tag'], name='welfare_reg_senior__1b5a9c_idx')],
            },
        ),
        migrations.CreateModel(
            name='Notification',
            fields=_base_fields() + [
                ('notification_type', models.CharField(choices=[('senior_registered', 'Senior Registered'), ('application_submitted', 'Application Submitted'), ('application_approved', 'Application Approved'), ('application_rejected', 'Application Rejected'), ('application_pending', 'Application Pending'), ('release_scheduled', 'Release Scheduled'), ('fund_added', 'Fund Added')], db_index=True, max_length=50)),
                ('title', models.CharField(max_length=200)),
                ('message', models.TextField()),
                ('is_read', models.BooleanField(db_index=True, default=False)),
                ('read_at', models.DateTimeField(blank=True, null=True)),
                ('related_application', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='notifications', to='welfare.application')),
                ('related_senior', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='notifications', to='welfare.senior')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='notifications', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['user', 'is_read'], name='welfare_not_user_id_4f7c3b_idx')],
            },
        ),
    ]
