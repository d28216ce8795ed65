from django.urls import path
from . import views

urlpatterns = [
    # DFA minimisation
    path('api/minimise-dfa/', views.min_dfa, name='minimise_dfa'),
    path('api/minimise-definition/', views.minimise_definition_view, name='minimise_definition'),

    # Text definition format
    path('api/parse-definition/', views.parse_definition_view, name='parse_definition'),

    # Property checking and simulation
    path('api/check-fsa-properties/', views.check_fsa_properties, name='check_fsa_properties'),
    path('api/simulate-dfa/', views.simulate_dfa, name='simulate_dfa'),
]
