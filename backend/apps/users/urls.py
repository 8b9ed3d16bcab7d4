from django.urls import path
from . import views

# Autenticación JWT de clientes: /api/users/
urlpatterns = [
    path('register/', views.register, name='user-register'),                  # POST: Alta de cliente + tokens
    path('login/', views.login, name='user-login'),                           # POST: email, username o teléfono
    path('logout/', views.logout, name='user-logout'),                        # POST: Blacklist del refresh token
    path('profile/', views.profile, name='user-profile'),                     # GET: Usuario actual
    path('profile/update/', views.update_profile, name='user-profile-update'),  # PUT/PATCH: Editar perfil
]
