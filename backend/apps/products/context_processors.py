from django.utils.functional import SimpleLazyObject

from .models import Category


def shared_categories(request):
    """
    Comparte las categorías activas con todos los templates.
    La consulta solo se ejecuta si el template las usa.
    """
    def load():
        return list(
            Category.objects.filter(is_active=True).values('id', 'name', 'name_ar', 'slug')
        )

    return {'categories': SimpleLazyObject(load)}
