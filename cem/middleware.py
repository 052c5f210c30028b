"""
Middleware that lets API routes be called with or without a trailing slash.
The frontend calls ``/api/customers`` while the routers register ``/api/customers/``.
"""
from django.utils.deprecation import MiddlewareMixin


class APITrailingSlashMiddleware(MiddlewareMixin):
    """
    Appends a trailing slash to ``/api/`` paths before URL resolution so that
    POST/PUT/DELETE requests are not answered with a 301 redirect.
    """

    def process_request(self, request):
        path_info = request.META.get('PATH_INFO', request.path_info)

        if path_info.startswith('/api/') and not path_info.endswith('/'):
            last_segment = path_info.split('/')[-1]
            # format suffixes such as schema.json stay untouched
            if last_segment and '.' not in last_segment:
                new_path = path_info + '/'
                request.META['PATH_INFO'] = new_path
                request.path_info = new_path
                request.path = request.path[:len(request.path) - len(path_info)] + new_path
