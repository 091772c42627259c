from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('id', 'listing', 'author', 'receiver', 'rating', 'is_visible', 'created_at')
    list_filter = ('is_visible', 'rating')
    search_fields = ('listing__title', 'author__email', 'comment')
