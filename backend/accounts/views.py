from rest_framework import status, views
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .permissions import Caller, get_roles_equal_or_below
from .serializers import UserCreateSerializer, UserSerializer
from .services import create_agency_user


class CurrentUserView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data, status=status.HTTP_200_OK)


class AssignableRolesView(views.APIView):
    """Roles the current user may assign, highest first."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(get_roles_equal_or_below(request.user.role), status=status.HTTP_200_OK)


class UserCreateView(views.APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        ser = UserCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        user = create_agency_user(Caller.from_user(request.user), **ser.validated_data)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)
