from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="StoredDocument",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("collection", models.CharField(max_length=64)),
                ("document_id", models.CharField(max_length=36)),
                ("data", models.JSONField(default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["collection", "created_at"],
                "indexes": [
                    models.Index(
                        fields=["collection", "created_at"],
                        name="ticketing_doc_collection_idx",
                    )
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("collection", "document_id"),
                        name="unique_document_per_collection",
                    )
                ],
            },
        ),
    ]
