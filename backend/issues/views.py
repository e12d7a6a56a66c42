from rest_framework import status, views
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import Caller

from .serializers import IssueCreateSerializer, IssueResolveSerializer, IssueSerializer, IssueUpdateSerializer
from .services import create_issue, delete_issue, get_issue, list_issues, resolve_issue, update_issue


class IssueListCreateView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        result = list_issues(Caller.from_user(request.user), request.query_params)
        result["rows"] = IssueSerializer(result["rows"], many=True).data
        return Response(result, status=status.HTTP_200_OK)

    def post(self, request):
        ser = IssueCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        issue = create_issue(Caller.from_user(request.user), ser.validated_data, user=request.user)
        return Response(IssueSerializer(issue).data, status=status.HTTP_201_CREATED)


class IssueDetailView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, id):
        issue = get_issue(Caller.from_user(request.user), id)
        return Response(IssueSerializer(issue).data, status=status.HTTP_200_OK)

    def patch(self, request, id):
        ser = IssueUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        issue = update_issue(Caller.from_user(request.user), id, ser.validated_data)
        return Response({"status": "success", "data": IssueSerializer(issue).data}, status=status.HTTP_200_OK)

    def delete(self, request, id):
        delete_issue(Caller.from_user(request.user), id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class IssueResolveView(views.APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, id):
        ser = IssueResolveSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        issue = resolve_issue(
            Caller.from_user(request.user), id, ser.validated_data["resolution_notes"], user=request.user
        )
        return Response({"status": "success", "data": IssueSerializer(issue).data}, status=status.HTTP_200_OK)
