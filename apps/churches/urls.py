from django.urls import path
from . import views

app_name = 'churches'

urlpatterns = [
    path('current/', views.current_church, name='current'),
]
