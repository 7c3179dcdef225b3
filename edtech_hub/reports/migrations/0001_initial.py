from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('classrooms', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='PerformanceReport',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('report_type', models.CharField(choices=[('weekly', 'Weekly'), ('monthly', 'Monthly'), ('semester', 'Semester'), ('custom', 'Custom')], max_length=16)),
                ('start_date', models.DateTimeField()),
                ('end_date', models.DateTimeField()),
                ('attendance_rate', models.FloatField(default=0)),
                ('participation_score', models.FloatField(default=0)),
                ('notes_count', models.PositiveIntegerField(default=0)),
                ('average_session_duration', models.FloatField(default=0)),
                ('strengths', models.JSONField(blank=True, default=list)),
                ('improvements', models.JSONField(blank=True, default=list)),
                ('generated_at', models.DateTimeField(auto_now_add=True)),
                ('classroom', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='reports', to='classrooms.classroom')),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='performance_reports', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-end_date', '-generated_at'],
                'indexes': [models.Index(fields=['student', 'end_date'], name='report_student_end_idx'), models.Index(fields=['classroom'], name='report_classroom_idx')],
            },
        ),
    ]
