import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('projects', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Submission',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('document_type', models.CharField(choices=[('chapter', 'Chapter'), ('proposal', 'Proposal'), ('final_paper', 'Final Paper')], default='chapter', max_length=20)),
                ('chapter', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('version', models.PositiveIntegerField(default=1)),
                ('file_name', models.CharField(max_length=255)),
                ('file_type', models.CharField(max_length=120)),
                ('file_size', models.PositiveIntegerField(default=0)),
                ('storage_key', models.CharField(max_length=500)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('revisions_required', 'Revisions Required'), ('rejected', 'Rejected'), ('locked', 'Locked')], default='pending', max_length=30)),
                ('originality_score', models.IntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ('extracted_text', models.TextField(blank=True, default='')),
                ('plagiarism_status', models.CharField(choices=[('queued', 'Queued'), ('processing', 'Processing'), ('completed', 'Completed'), ('failed', 'Failed')], default='queued', max_length=20)),
                ('plagiarism_score', models.IntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ('plagiarism_matches', models.JSONField(blank=True, default=list)),
                ('plagiarism_processed_at', models.DateTimeField(blank=True, null=True)),
                ('plagiarism_job_id', models.CharField(blank=True, max_length=100, null=True)),
                ('plagiarism_error', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='submissions', to='projects.project')),
                ('submitted_by', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='submissions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'submissions',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['project', 'chapter', 'version'], name='sub_project_chapter_idx'),
                    models.Index(fields=['plagiarism_status'], name='sub_plagiarism_status_idx'),
                ],
            },
        ),
    ]
