import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tenants", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="TenantLimitOverride",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("query_timeout", models.DurationField(blank=True, null=True)),
                ("max_query_lookback", models.DurationField(blank=True, null=True)),
                ("max_query_length", models.DurationField(blank=True, null=True)),
                ("max_entries_limit_per_query", models.PositiveIntegerField(blank=True, null=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("tenant", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="limits_override", to="tenants.tenant")),
            ],
            options={
                "db_table": "tenant_limit_overrides",
            },
        ),
    ]
