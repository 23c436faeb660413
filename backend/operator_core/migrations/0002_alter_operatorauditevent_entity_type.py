from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("operator_core", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="operatorauditevent",
            name="entity_type",
            field=models.CharField(
                choices=[
                    ("user", "User"),
                    ("role_request", "Role Request"),
                    ("property", "Property"),
                    ("property_report", "Property Report"),
                    ("booking", "Booking"),
                    ("contact_message", "Contact Message"),
                    ("setting", "Setting"),
                ],
                max_length=64,
            ),
        ),
    ]
