"""
Role allowlists and the default module catalog.

Every role check in the project goes through ``policy`` so that the list of
manager roles and the module catalog are defined exactly once.
"""


DEFAULT_MODULES = [
    # (name, display_name, route, icon)
    ('dashboard', 'داشبورد', '/dashboard', 'LayoutDashboard'),
    ('customers', 'مشتریان', '/dashboard/customers', 'Users'),
    ('contacts', 'مخاطبین', '/dashboard/contacts', 'UserCheck'),
    ('coworkers', 'همکاران', '/dashboard/coworkers', 'Users2'),
    ('activities', 'فعالیت‌ها', '/dashboard/activities', 'Activity'),
    ('interactions', 'تعاملات', '/dashboard/interactions', 'MessageCircle'),
    ('chat', 'چت', '/dashboard/interactions/chat', 'MessageCircle2'),
    ('sales', 'ثبت فروش', '/dashboard/sales', 'TrendingUp'),
    ('sales_opportunities', 'فرصت‌های فروش', '/dashboard/sales/opportunities', 'Target'),
    ('feedback', 'بازخوردها', '/dashboard/feedback', 'MessageCircle'),
    ('feedback_new', 'ثبت بازخورد', '/dashboard/feedback/new', 'MessageCircle'),
    ('surveys', 'نظرسنجی‌ها', '/dashboard/surveys', 'ChevronRight'),
    ('csat', 'CSAT', '/dashboard/csat', 'ChevronRight'),
    ('nps', 'NPS', '/dashboard/nps', 'ChevronRight'),
    ('emotions', 'تحلیل احساسات', '/dashboard/emotions', 'Activity'),
    ('insights', 'بینش‌های خودکار', '/dashboard/insights', 'BarChart3'),
    ('touchpoints', 'نقاط تماس', '/dashboard/touchpoints', 'Target'),
    ('customer_health', 'سلامت مشتری', '/dashboard/customer-health', 'Activity'),
    ('alerts', 'هشدارها', '/dashboard/alerts', 'Activity'),
    ('voice_of_customer', 'صدای مشتری (VOC)', '/dashboard/voice-of-customer', 'MessageCircle'),
    ('projects', 'پروژه‌ها', '/dashboard/projects', 'Briefcase'),
    ('tasks', 'وظایف', '/dashboard/tasks', 'CheckCircle'),
    ('calendar', 'تقویم', '/dashboard/calendar', 'Calendar'),
    ('reports', 'گزارش‌ها', '/dashboard/reports', 'BarChart3'),
    ('profile', 'پروفایل', '/dashboard/profile', 'User'),
    ('settings', 'تنظیمات عمومی', '/dashboard/settings', 'Settings'),
    ('cem_settings', 'تنظیمات CEM', '/dashboard/cem-settings', 'Settings'),
]

# (title, href, icon, module names, extra children)
NAVIGATION_GROUPS = [
    ('مدیریت فروش', '/dashboard/sales', 'TrendingUp',
     ('sales', 'sales_opportunities', 'deals', 'products'), ()),
    ('مدیریت تجربه مشتری', '/dashboard/cem', 'Users',
     ('customers', 'contacts', 'interactions', 'chat', 'feedback', 'feedback_new',
      'surveys', 'csat', 'nps', 'customer_health'), ()),
    ('مدیریت همکاران', '/dashboard/coworkers', 'Activity',
     ('coworkers', 'activities', 'tasks', 'calendar'),
     (('گزارش‌ها', '/dashboard/reports', 'BarChart3'),)),
    ('هوش مصنوعی و تحلیل', '/dashboard/insights', 'BarChart3',
     ('emotions', 'insights', 'reports_analysis', 'touchpoints', 'alerts', 'voice_of_customer'),
     (('تحلیل صوتی', '/dashboard/insights/audio-analysis', 'Brain'),)),
    ('پروژه‌ها و محصولات', '/dashboard/projects', 'Briefcase',
     ('projects', 'products'), ()),
]

SETTINGS_GROUP = ('تنظیمات', '/dashboard/settings', 'Settings', ('settings', 'cem_settings'))

ROUTE_DISPLAY_NAMES = {
    '/dashboard': 'داشبورد',
    '/dashboard/customers': 'مشتریان',
    '/dashboard/contacts': 'مخاطبین',
    '/dashboard/coworkers': 'همکاران',
    '/dashboard/activities': 'فعالیت‌ها',
    '/dashboard/interactions': 'تعاملات',
    '/dashboard/interactions/chat': 'چت',
    '/dashboard/deals': 'معاملات',
    '/dashboard/feedback': 'بازخوردها',
    '/dashboard/reports': 'گزارش‌ها',
    '/dashboard/daily-reports': 'گزارش‌های روزانه',
    '/dashboard/insights/reports-analysis': 'تحلیل گزارشات',
    '/dashboard/calendar': 'تقویم',
    '/dashboard/profile': 'پروفایل',
    '/dashboard/settings': 'تنظیمات',
    '/dashboard/projects': 'پروژه‌ها و محصولات',
    '/dashboard/projects/products': 'محصولات',
}


class AccessPolicy:
    """Single source of truth for role membership and module defaults."""

    manager_roles = frozenset({'ceo', 'مدیر', 'sales_manager', 'مدیر فروش'})
    ceo_roles = frozenset({'ceo', 'مدیر'})
    sales_roles = manager_roles | {'sales_agent', 'کارشناس فروش'}
    assignable_roles = ('ceo', 'sales_manager', 'sales_agent', 'agent')
    baseline_modules = ('dashboard', 'tasks', 'profile')
    hidden_from_grants = ('dashboard', 'profile')

    def is_manager(self, role):
        return role in self.manager_roles

    def is_ceo(self, role):
        return role in self.ceo_roles

    def is_sales(self, role):
        return role in self.sales_roles

    def default_catalog(self):
        """The module catalog as plain dicts, ids and sort order following list position."""
        return [
            {
                'id': index,
                'name': name,
                'display_name': display_name,
                'route': route,
                'icon': icon,
                'sort_order': index,
                'parent_id': None,
            }
            for index, (name, display_name, route, icon) in enumerate(DEFAULT_MODULES, start=1)
        ]

    def default_baseline(self):
        return [m for m in self.default_catalog() if m['name'] in self.baseline_modules]


policy = AccessPolicy()
