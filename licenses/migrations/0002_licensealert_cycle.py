import django.utils.timezone
from django.db import migrations, models


def backfill_expiration_date(apps, schema_editor):
    LicenseAlert = apps.get_model("licenses", "LicenseAlert")
    for alert in LicenseAlert.objects.select_related("license").iterator():
        alert.expiration_date = alert.license.expiration_date
        alert.save(update_fields=["expiration_date"])


class Migration(migrations.Migration):

    dependencies = [
        ("licenses", "0001_initial"),
    ]

    operations = [
        migrations.RemoveConstraint(
            model_name="licensealert",
            name="license_alert_unique_sequence",
        ),
        migrations.AddField(
            model_name="licensealert",
            name="expiration_date",
            field=models.DateField(null=True),
        ),
        migrations.RunPython(backfill_expiration_date, migrations.RunPython.noop),
        migrations.AlterField(
            model_name="licensealert",
            name="expiration_date",
            field=models.DateField(),
        ),
        migrations.AddField(
            model_name="licensealert",
            name="claimed_at",
            field=models.DateTimeField(default=django.utils.timezone.now),
        ),
        migrations.AddConstraint(
            model_name="licensealert",
            constraint=models.UniqueConstraint(
                fields=("license", "expiration_date", "sequence"),
                name="license_alert_unique_cycle_sequence",
            ),
        ),
    ]
