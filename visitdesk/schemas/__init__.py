from visitdesk.schemas.auth import AdminLogin, AdminResponse, AdminLoginResponse
from visitdesk.schemas.visitor import CheckInRequest, VisitorUpdate, VisitorResponse
from visitdesk.schemas.visit import VisitResponse, CheckInResponse, VisitWithVisitor
from visitdesk.schemas.settings import SettingsUpdate, SettingsResponse
from visitdesk.schemas.report import VisitorReportCreate, VisitorReportUpdate, VisitorReportResponse
from visitdesk.schemas.dashboard import DashboardStats, SystemLogEntry
