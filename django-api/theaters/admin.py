from django.contrib import admin

from theaters.models import Row, Seat, Section, Theater


class SectionInline(admin.TabularInline):
    model = Section
    extra = 0


class RowInline(admin.TabularInline):
    model = Row
    extra = 0


class SeatInline(admin.TabularInline):
    model = Seat
    extra = 0


@admin.register(Theater)
class TheaterAdmin(admin.ModelAdmin):
    list_display = ["name", "created_at"]
    search_fields = ["name"]
    inlines = [SectionInline]


@admin.register(Section)
class SectionAdmin(admin.ModelAdmin):
    list_display = ["name", "theater"]
    list_filter = ["theater"]
    inlines = [RowInline]


@admin.register(Row)
class RowAdmin(admin.ModelAdmin):
    list_display = ["number", "section"]
    list_filter = ["section__theater"]
    inlines = [SeatInline]


@admin.register(Seat)
class SeatAdmin(admin.ModelAdmin):
    list_display = ["number", "row", "status", "updated_at"]
    list_filter = ["status", "row__section__theater"]
