from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Patient",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("medical_record_number", models.CharField(max_length=16, unique=True)),
                ("full_name", models.CharField(max_length=255)),
                ("date_of_birth", models.DateField()),
                ("gender", models.CharField(choices=[("male", "Male"), ("female", "Female")], max_length=8)),
                ("phone", models.CharField(blank=True, max_length=32, null=True)),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                ("address", models.TextField(blank=True, null=True)),
                ("emergency_contact", models.CharField(blank=True, max_length=255, null=True)),
                ("emergency_phone", models.CharField(blank=True, max_length=32, null=True)),
                ("blood_type", models.CharField(blank=True, max_length=8, null=True)),
                ("allergies", models.TextField(blank=True, null=True)),
            ],
            options={
                "db_table": "patients_patient",
                "indexes": [
                    models.Index(fields=["full_name"], name="patients_full_name_idx"),
                    models.Index(fields=["phone"], name="patients_phone_idx"),
                ],
            },
        ),
    ]
