from django.db import models


class DistrictRecord(models.Model):
    """One monthly MGNREGA snapshot for a district.

    Rows are written by the external data process; this project only reads
    them. The table may hold duplicate rows, so listings deduplicate.
    """
    district_code = models.CharField(max_length=20, db_index=True)
    district_name = models.CharField(max_length=100)
    state_code = models.CharField(max_length=10, db_index=True)
    state_name = models.CharField(max_length=100)

    total_households = models.IntegerField(default=0)
    avg_days_per_household = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)
    total_expenditure = models.DecimalField(max_digits=18, decimal_places=2, default=0)
    works_completed = models.IntegerField(default=0)

    # Period id, e.g. "2024-07"; sorts chronologically as a string
    month = models.CharField(max_length=7, db_index=True)
    updated_at = models.DateTimeField()

    class Meta:
        db_table = 'districts'
        ordering = ['state_name', 'district_name', '-month']

    def __str__(self):
        return f"{self.district_name}, {self.state_name} - {self.month}"

    def as_dict(self):
        return {
            'id': self.pk,
            'district_code': self.district_code,
            'district_name': self.district_name,
            'state_code': self.state_code,
            'state_name': self.state_name,
            'total_households': self.total_households,
            'avg_days_per_household': (
                float(self.avg_days_per_household)
                if self.avg_days_per_household is not None else None
            ),
            'total_expenditure': float(self.total_expenditure or 0),
            'works_completed': self.works_completed,
            'month': self.month,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
