from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from .responses import envelope


class HealthView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):
        return envelope({"status": "ok"}, message="Server is running")
