import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="StoreRow",
            fields=[
                ("id", models.CharField(max_length=255, primary_key=True, serialize=False)),
                ("data", models.JSONField(default=dict)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "khata_store_rows",
                "ordering": ["id"],
            },
        ),
    ]
