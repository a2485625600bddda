from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='OriginalityJobRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('job_id', models.CharField(db_index=True, max_length=100)),
                ('submission_id', models.UUIDField(db_index=True)),
                ('state', models.CharField(choices=[('completed', 'Completed'), ('failed', 'Failed')], max_length=20)),
                ('attempts', models.PositiveSmallIntegerField(default=1)),
                ('originality_score', models.IntegerField(blank=True, null=True)),
                ('error_message', models.TextField(blank=True)),
                ('finished_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'originality_job_records',
                'ordering': ['-finished_at', '-id'],
                'indexes': [models.Index(fields=['state', 'finished_at'], name='orig_job_state_idx')],
            },
        ),
    ]
