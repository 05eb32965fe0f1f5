from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='SeoMeta',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('page_id', models.CharField(max_length=255, unique=True)),
                ('title', models.CharField(blank=True, max_length=300)),
                ('description', models.TextField(blank=True)),
                ('url', models.URLField(blank=True, max_length=500)),
                ('category', models.CharField(blank=True, db_index=True, max_length=100)),
                ('seo_score', models.PositiveSmallIntegerField(db_index=True, default=0)),
                ('structured_data', models.JSONField(blank=True, default=dict)),
                ('links_version', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'SEO metadata',
                'verbose_name_plural': 'SEO metadata',
                'ordering': ['-seo_score', 'page_id'],
            },
        ),
    ]
