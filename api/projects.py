"""
项目 API 蓝图

提供项目看板、统计和新建接口
"""

from flask import Blueprint, current_app

from core.auth import require_auth, get_current_user
from core.backend import current_backend
from models import UGANDAN_CONSTITUENCIES, PROJECT_CATEGORIES, ProjectDraft
from models.project import DRAFT_FIELDS
from services import ProjectBoard, ProjectStore, STATUS_FILTER_OPTIONS, VIEW_MODES, format_currency
from .base import api_response, api_error, validate_json_request, get_request_args, APIException

# 创建蓝图
projects_bp = Blueprint('projects', __name__)


def _build_board():
    store = ProjectStore(current_backend())
    return ProjectBoard(
        store,
        constituencies=UGANDAN_CONSTITUENCIES,
        currency_code=current_app.config.get('CURRENCY_CODE', 'UGX'),
    )


@projects_bp.route('', methods=['GET'])
@require_auth
def list_projects():
    """获取项目看板（筛选后的项目和统计）"""
    args = get_request_args()
    board = _build_board()

    try:
        board.search = args['search']
        board.status_filter = args['status']
        board.view = args['view']
    except ValueError as e:
        raise APIException(str(e), 400, error_code="INVALID_FILTER")

    board.load()
    return api_response(board.render(), "Projects retrieved successfully")


@projects_bp.route('/stats', methods=['GET'])
@require_auth
def get_project_stats():
    """获取项目汇总统计"""
    board = _build_board()
    board.load()
    summary = board.summary()

    data = summary.to_dict()
    data['total_budget_display'] = format_currency(summary.total_budget, board.currency_code)
    return api_response(data, "Project stats retrieved successfully")


@projects_bp.route('/form', methods=['GET'])
@require_auth
def get_project_form():
    """获取新建项目表单的选项和默认值"""
    return api_response({
        'categories': PROJECT_CATEGORIES,
        'constituencies': UGANDAN_CONSTITUENCIES,
        'status_filters': STATUS_FILTER_OPTIONS,
        'views': list(VIEW_MODES),
        'defaults': ProjectDraft.defaults(UGANDAN_CONSTITUENCIES).to_dict(),
    }, "Project form retrieved successfully")


@projects_bp.route('', methods=['POST'])
@require_auth
def create_project():
    """创建新项目，成功后返回重新读取的看板"""
    data = validate_json_request(optional_fields=list(DRAFT_FIELDS))

    board = _build_board()
    workflow = board.workflow
    workflow.open()
    workflow.update(**data)
    outcome = workflow.submit()

    if outcome.status == outcome.INVALID:
        return api_error(
            "Project draft is invalid",
            422,
            error_code="VALIDATION_FAILED",
            details={'fields': outcome.errors}
        )

    if outcome.status == outcome.FAILED:
        error = outcome.error
        return api_error(
            f"Failed to create project: {error.message}",
            error.status_code,
            error_code=error.error_code,
            details=error.to_details()
        )

    current_app.logger.info(f"Project {outcome.project_id} created by {get_current_user() or 'anonymous'}")
    return api_response(
        {'id': outcome.project_id, 'board': board.render()},
        "Project created successfully",
        201
    )
