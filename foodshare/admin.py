from django.contrib import admin

from foodshare.models import Event, Reservation


class ReservationInline(admin.TabularInline):
    model = Reservation
    extra = 0
    readonly_fields = ["user_id", "status", "created_at"]
    can_delete = False


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "location", "date", "time", "capacity", "reserved_count"]
    list_filter = ["date"]
    search_fields = ["title", "location", "owner_id"]
    # Written only through the capacity ledger.
    readonly_fields = ["reserved_count", "created_at", "updated_at"]
    inlines = [ReservationInline]


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = ["event", "user_id", "status", "created_at"]
    list_filter = ["event"]
    search_fields = ["user_id"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
