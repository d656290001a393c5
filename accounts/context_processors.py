from .models import Notification

def navigation(request):
    user = getattr(request, "user", None)
    if not user or not user.is_authenticated:
        return {"nav_role": "", "nav_unread_notifications": 0, "nav_recent_notifications": []}
    qs = Notification.objects.filter(user=user)
    return {
        "nav_role": getattr(user, "role", ""),
        "nav_unread_notifications": qs.filter(is_read=False).count(),
        "nav_recent_notifications": list(qs[:5]),
    }
