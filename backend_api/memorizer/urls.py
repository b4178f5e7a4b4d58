from django.urls import path
from .views import (
    health,
    list_scriptures,
    list_difficulties,
    start_practice,
    hide_words,
    request_hint,
    reset_practice,
    get_practice_detail,
)

urlpatterns = [
    path('health/', health, name='Health'),
    path('scriptures', list_scriptures, name='scripture-list'),
    path('difficulties', list_difficulties, name='difficulty-list'),
    path('practice/start', start_practice, name='start-practice'),
    path('practice/hide', hide_words, name='hide-words'),
    path('practice/hint', request_hint, name='request-hint'),
    path('practice/reset', reset_practice, name='reset-practice'),
    path('practice/<int:session_id>', get_practice_detail, name='practice-detail'),
]
