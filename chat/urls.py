from django.urls import path

from .views import ChatMessagesView, ConversationsView

urlpatterns = [
    path('chat/messages/', ChatMessagesView.as_view(), name='chat-messages'),
    path('chat/conversations/', ConversationsView.as_view(), name='chat-conversations'),
]
