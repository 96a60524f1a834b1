from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AttributeContent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("resource", models.CharField(max_length=64)),
                ("object_uuid", models.UUIDField(db_index=True)),
                (
                    "kind",
                    models.CharField(choices=[("METADATA", "Metadata"), ("CUSTOM", "Custom")], max_length=16),
                ),
                ("name", models.CharField(max_length=255)),
                (
                    "content_type",
                    models.CharField(
                        choices=[
                            ("STRING", "String"),
                            ("TEXT", "Text"),
                            ("CODEBLOCK", "Code block"),
                            ("INTEGER", "Integer"),
                            ("FLOAT", "Float"),
                            ("BOOLEAN", "Boolean"),
                            ("DATE", "Date"),
                            ("TIME", "Time"),
                            ("DATETIME", "Date and time"),
                            ("SECRET", "Secret"),
                            ("FILE", "File"),
                            ("CREDENTIAL", "Credential"),
                            ("OBJECT", "Object"),
                        ],
                        max_length=16,
                    ),
                ),
                ("string_value", models.TextField(blank=True, null=True)),
                ("number_value", models.FloatField(blank=True, null=True)),
                ("boolean_value", models.BooleanField(blank=True, null=True)),
                ("date_value", models.DateField(blank=True, null=True)),
                ("time_value", models.TimeField(blank=True, null=True)),
                ("datetime_value", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Attribute Content",
                "verbose_name_plural": "Attribute Contents",
                "indexes": [
                    models.Index(
                        fields=["resource", "kind", "name", "content_type"],
                        name="attr_content_definition_idx",
                    )
                ],
            },
        ),
    ]
