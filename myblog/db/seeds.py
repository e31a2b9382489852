"""
Baseline content inserted by the bootstrap on first start.

DEFAULT_SETTINGS is seeded key by key (missing keys only); ABOUT_CARDS is
seeded only when the about page has no main cards at all.
"""

from typing import NamedTuple


class SettingSeed(NamedTuple):
    key: str
    value: str
    type: str
    description: str
    category: str


DEFAULT_SETTINGS: tuple[SettingSeed, ...] = (
    # Appearance
    SettingSeed("background_image", "/img/test.webp", "string", "页面背景图片路径", "appearance"),
    SettingSeed("global_opacity", "0.15", "number", "全局透明度 (0-1)", "appearance"),
    SettingSeed("background_size", "cover", "string", "背景图片尺寸 (cover, contain, auto)", "appearance"),
    SettingSeed("background_position", "center", "string", "背景图片位置", "appearance"),
    SettingSeed("background_repeat", "no-repeat", "string", "背景图片重复方式", "appearance"),
    SettingSeed("background_attachment", "fixed", "string", "背景图片滚动方式", "appearance"),
    SettingSeed("blur_amount", "20px", "string", "背景模糊程度", "appearance"),
    SettingSeed("saturate_amount", "180%", "string", "背景饱和度", "appearance"),
    SettingSeed("dark_mode_enabled", "false", "boolean", "是否启用暗色模式", "appearance"),
    SettingSeed("navbar_glass_color", "rgba(220, 138, 221, 0.15)", "string", "导航栏毛玻璃颜色", "appearance"),
    SettingSeed("navbar_text_color", "#333333", "string", "导航栏文字颜色", "appearance"),
    SettingSeed("card_glass_color", "rgba(220, 138, 221, 0.2)", "string", "页面卡片毛玻璃颜色", "appearance"),
    SettingSeed("footer_glass_color", "rgba(220, 138, 221, 0.25)", "string", "底栏毛玻璃颜色", "appearance"),
    # Template
    SettingSeed("template_name", "欢迎来到我的博客", "string", "个人主页标题", "template"),
    SettingSeed("template_greting", "这是一个使用 Python 构建的个人博客系统，支持文章管理、数据分析等功能。", "string", "首页欢迎语", "template"),
    SettingSeed("template_year", "2026", "string", "版权年份", "template"),
    SettingSeed("template_foods", "我的博客", "string", "页脚信息", "template"),
    SettingSeed("template_article_title", "true", "boolean", "是否显示文章标题", "template"),
    SettingSeed("template_article_title_prefix", "文章", "string", "文章标题前缀", "template"),
    SettingSeed("template_switch_notice", "true", "boolean", "是否显示切换界面提示", "template"),
    SettingSeed("template_switch_notice_text", "回来继续阅读", "string", "切换标签页时显示的提示文字", "template"),
    SettingSeed("external_link_warning", "true", "boolean", "是否启用外部链接跳转警告", "template"),
    SettingSeed("external_link_whitelist", "github.com,gitee.com,stackoverflow.com", "string", "外部链接白名单（逗号分隔的域名）", "template"),
    SettingSeed("external_link_warning_text", "您即将离开本站，前往外部链接", "string", "外部链接警告提示文字", "template"),
    SettingSeed("live2d_enabled", "false", "boolean", "是否启用 Live2D 看板娘", "template"),
    SettingSeed("live2d_show_on_index", "true", "boolean", "是否在首页显示 Live2D", "template"),
    SettingSeed("live2d_show_on_passage", "true", "boolean", "是否在文章页显示 Live2D", "template"),
    SettingSeed("live2d_show_on_collect", "true", "boolean", "是否在归档页显示 Live2D", "template"),
    SettingSeed("live2d_show_on_about", "true", "boolean", "是否在关于页显示 Live2D", "template"),
    SettingSeed("live2d_show_on_admin", "false", "boolean", "是否在管理页显示 Live2D", "template"),
    SettingSeed("live2d_model_id", "1", "string", "Live2D 模型 ID", "template"),
    SettingSeed("live2d_model_path", "", "string", "Live2D 自定义模型路径（留空使用 CDN）", "template"),
    SettingSeed("live2d_cdn_path", "https://unpkg.com/live2d-widget-model@1.0.5/", "string", "Live2D CDN 路径", "template"),
    SettingSeed("live2d_position", "right", "string", "Live2D 显示位置（left/right）", "template"),
    SettingSeed("live2d_width", "280px", "string", "Live2D 宽度", "template"),
    SettingSeed("live2d_height", "250px", "string", "Live2D 高度", "template"),
    SettingSeed("sponsor_enabled", "false", "boolean", "是否启用赞助功能", "template"),
    SettingSeed("sponsor_title", "感谢您的支持", "string", "赞助模态框标题", "template"),
    SettingSeed("sponsor_image", "/img/avatar.png", "string", "赞助图片路径", "template"),
    SettingSeed("sponsor_description", "如果您觉得这个博客对您有帮助，欢迎赞助支持！", "string", "赞助描述文字", "template"),
    SettingSeed("sponsor_button_text", "❤️ 赞助支持", "string", "赞助按钮文字", "template"),
    SettingSeed("global_avatar", "/img/avatar.webp", "string", "全局头像路径", "template"),
    # Music player
    SettingSeed("music_enabled", "false", "boolean", "是否启用音乐播放器", "appearance"),
    SettingSeed("music_auto_play", "false", "boolean", "音乐是否自动播放", "appearance"),
    SettingSeed("music_control_size", "medium", "string", "音乐控件大小 (small, medium, large)", "appearance"),
    SettingSeed("music_custom_css", "", "string", "音乐播放器自定义CSS样式", "appearance"),
    SettingSeed("music_player_color", "rgba(66, 133, 244, 0.9)", "string", "音乐播放器颜色 (RGBA格式)", "appearance"),
    SettingSeed("music_position", "bottom-right", "string", "音乐播放器显示位置 (top-left, top-right, bottom-left, bottom-right)", "template"),
)

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"
DEFAULT_ADMIN_EMAIL = "admin@example.com"

ABOUT_CARDS = (
    {
        "title": "项目简介",
        "icon": "📖",
        "layout_type": "default",
        "sort_order": 1,
        "sub_cards": (
            {
                "title": "欢迎",
                "description": "欢迎来到我们的网站！这是一个专注于技术分享与知识管理的平台。",
                "sort_order": 1,
            },
            {
                "title": "目标",
                "description": "我们的目标是构建一个开放、友好、专业的技术社区。",
                "sort_order": 2,
            },
        ),
    },
    {
        "title": "核心特性",
        "icon": "⚡",
        "layout_type": "grid",
        "sort_order": 2,
        "sub_cards": (
            {
                "title": "高性能",
                "description": "采用现代化技术栈，确保网站快速响应。",
                "icon": "🚀",
                "sort_order": 1,
            },
            {
                "title": "安全可靠",
                "description": "多层安全防护机制，保护用户数据隐私。",
                "icon": "🔒",
                "sort_order": 2,
            },
            {
                "title": "全平台",
                "description": "响应式设计，各类设备完美呈现。",
                "icon": "📱",
                "sort_order": 3,
            },
            {
                "title": "开放API",
                "description": "提供完善的API接口，方便集成扩展。",
                "icon": "🌐",
                "sort_order": 4,
            },
        ),
    },
    {
        "title": "开发团队",
        "icon": "👥",
        "layout_type": "grid",
        "sort_order": 3,
        "sub_cards": (
            {
                "title": "技术总监",
                "description": "负责平台架构设计与技术选型。",
                "icon": "JD",
                "sort_order": 1,
            },
            {
                "title": "前端负责人",
                "description": "专注于用户体验与交互设计。",
                "icon": "LW",
                "sort_order": 2,
            },
            {
                "title": "后端工程师",
                "description": "负责服务器端逻辑与数据库设计。",
                "icon": "ZY",
                "sort_order": 3,
            },
        ),
    },
    {
        "title": "联系我们",
        "icon": "📞",
        "layout_type": "flex",
        "sort_order": 4,
        "sub_cards": (
            {
                "title": "电子邮件",
                "description": "contact@example.com",
                "icon": "📧",
                "link_url": "mailto:contact@example.com",
                "sort_order": 1,
            },
            {
                "title": "GitHub",
                "description": "github.com/ourproject",
                "icon": "🐙",
                "link_url": "https://github.com/ourproject",
                "sort_order": 2,
            },
            {
                "title": "社交媒体",
                "description": "@ourproject",
                "icon": "🐦",
                "link_url": "https://twitter.com/ourproject",
                "sort_order": 3,
            },
        ),
    },
)
