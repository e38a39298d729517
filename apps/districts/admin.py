from django.contrib import admin
from .models import DistrictRecord


@admin.register(DistrictRecord)
class DistrictRecordAdmin(admin.ModelAdmin):
    list_display = ('district_name', 'state_name', 'month', 'total_households',
                    'avg_days_per_household', 'total_expenditure', 'works_completed')
    list_filter = ('state_name', 'month')
    search_fields = ('district_name', 'district_code', 'state_name')
    ordering = ('state_name', 'district_name', '-month')

    # Records are owned by the external sync process
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
