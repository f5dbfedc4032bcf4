from django.urls import path
from . import views

app_name = 'pairing'

urlpatterns = [
    # Rider
    path('code/', views.my_code, name='my-code'),
    path('code/regenerate/', views.regenerate_code, name='regenerate-code'),
    path('partners/', views.partners, name='partners'),

    # Partner
    path('pair/', views.pair, name='pair'),
    path('unpair/', views.unpair_view, name='unpair'),
]
