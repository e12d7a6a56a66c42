from django.http import JsonResponse
from rest_framework import status, views
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import Caller
from accounts.serializers import UserSerializer
from pricing.services.pricing_service import get_services_with_rates

from . import hierarchy
from .serializers import AgencyCreateSerializer, AgencySerializer, AgencyUpdateSerializer
from .services import create_child_agency, get_visible_agency, list_agencies, update_agency


class AgencyListCreateView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        rows = list_agencies(Caller.from_user(request.user))
        return Response(AgencySerializer(rows, many=True).data, status=status.HTTP_200_OK)

    def post(self, request):
        ser = AgencyCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        agency, admin_user = create_child_agency(Caller.from_user(request.user), ser.validated_data)
        return Response(
            {
                "message": "Agency created successfully",
                "agency": AgencySerializer(agency).data,
                "admin_user": UserSerializer(admin_user).data,
            },
            status=status.HTTP_201_CREATED,
        )


class AgencyDetailView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, id):
        agency = get_visible_agency(Caller.from_user(request.user), id)
        return Response(AgencySerializer(agency).data, status=status.HTTP_200_OK)

    def patch(self, request, id):
        ser = AgencyUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        agency = update_agency(Caller.from_user(request.user), id, ser.validated_data)
        return Response({"agency": AgencySerializer(agency).data}, status=status.HTTP_200_OK)


class AgencyChildrenView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, id):
        get_visible_agency(Caller.from_user(request.user), id)
        children = hierarchy.get_children(id)
        return Response(AgencySerializer(children, many=True).data, status=status.HTTP_200_OK)


class AgencyParentView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, id):
        get_visible_agency(Caller.from_user(request.user), id)
        parent = hierarchy.get_parent(id)
        if parent is None:
            return JsonResponse(None, safe=False, status=status.HTTP_200_OK)
        return Response(AgencySerializer(parent).data, status=status.HTTP_200_OK)


class AgencyServicesWithRatesView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, id):
        get_visible_agency(Caller.from_user(request.user), id)
        return Response(get_services_with_rates(id), status=status.HTTP_200_OK)
