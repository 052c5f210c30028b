"""
Report analysis through the external text-completion proxy, with a
statistical fallback when the proxy cannot answer.
"""
import logging

import jdatetime
import requests
from django.conf import settings

logger = logging.getLogger(__name__)

NOT_RECORDED = 'ثبت نشده'
NONE = 'ندارد'
UNKNOWN = 'نامشخص'


def build_analysis_prompt(user_name, user_role, start_date, end_date, reports):
    """
    Build the Persian analysis prompt.

    Args:
        reports: list of dicts with date, persian_date, work_description,
            working_hours, challenges, achievements and tasks (each task a dict
            with a title), in the order they should be numbered
    """
    days = []
    for index, report in enumerate(reports):
        tasks = report.get('tasks') or []
        days.append(
            f"\nروز {index + 1} ({report.get('persian_date') or report.get('date')}):\n"
            f"- کار انجام شده: {report.get('work_description')}\n"
            f"- ساعات کاری: {report.get('working_hours') or NOT_RECORDED}\n"
            f"- چالش‌ها: {report.get('challenges') or NONE}\n"
            f"- دستاوردها: {report.get('achievements') or NONE}\n"
            f"- تسک‌ها: {'، '.join(t['title'] for t in tasks) if tasks else NONE}\n"
        )

    return (
        f"\nتحلیل گزارشات کاری {user_name} ({user_role})\n"
        f"\nدوره: {start_date} تا {end_date} ({len(reports)} روز)\n"
        f"\nگزارشات:\n"
        f"{chr(10).join(days)}\n"
        f"\nلطفاً تحلیل کوتاه و مفیدی ارائه دهید شامل:\n"
        f"\n1. خلاصه عملکرد کلی\n"
        f"2. نقاط قوت اصلی\n"
        f"3. چالش‌های مهم\n"
        f"4. پیشنهادات بهبود\n"
        f"5. ارزیابی کلی (عالی/خوب/متوسط/ضعیف)\n"
        f"\nپاسخ را به زبان فارسی و کوتاه بنویسید.\n"
    )


def request_analysis(prompt):
    """
    Send a prompt to the AI proxy.

    Returns:
        dict: ``{'success': True, 'analysis': ...}`` or
        ``{'success': False, 'error': ...}``
    """
    url = settings.AI_PROXY_URL
    timeout = settings.AI_PROXY_TIMEOUT

    try:
        logger.info(f"Requesting report analysis from AI proxy: prompt_length={len(prompt)}")
        response = requests.get(
            url,
            params={'text': prompt},
            headers={'Accept': 'application/json'},
            timeout=timeout,
        )
        response.raise_for_status()
        result = response.json()
    except requests.exceptions.Timeout:
        logger.warning(f"AI proxy timed out after {timeout}s, using fallback analysis")
        return {'success': False, 'error': 'timeout'}
    except requests.exceptions.RequestException as e:
        logger.warning(f"AI proxy request failed: {str(e)}", exc_info=True)
        return {'success': False, 'error': f'Request failed: {str(e)}'}
    except ValueError as e:
        logger.warning(f"AI proxy returned invalid JSON: {str(e)}")
        return {'success': False, 'error': 'Invalid response'}

    if isinstance(result, dict):
        analysis = result.get('answer') or result.get('response') or result.get('text') or result
    else:
        analysis = result
    return {'success': True, 'analysis': analysis}


def _hours(value):
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def report_statistics(reports):
    """Totals used by the fallback texts"""
    hours = [r.get('working_hours') for r in reports]
    total_hours = sum(_hours(h) for h in hours)
    recorded = [h for h in hours if h]
    average_hours = f"{total_hours / len(recorded):.1f}" if recorded else UNKNOWN
    return {
        'count': len(reports),
        'total_hours': f"{total_hours:g}",
        'average_hours': average_hours,
        'challenges': sum(1 for r in reports if (r.get('challenges') or '').strip()),
        'achievements': sum(1 for r in reports if (r.get('achievements') or '').strip()),
    }


def fallback_analysis(user_name, start_date, end_date, reports):
    """Markdown summary built from raw numbers when the AI proxy is unavailable"""
    stats = report_statistics(reports)
    count = stats['count']
    average = stats['average_hours']

    if count >= 20:
        discipline = '✅ انضباط بالا در گزارش‌دهی'
    elif count >= 10:
        discipline = '⚠️ انضباط متوسط در گزارش‌دهی'
    else:
        discipline = '❌ نیاز به بهبود در گزارش‌دهی'

    if average != UNKNOWN and float(average) >= 8:
        hours_verdict = '✅ ساعات کاری مناسب'
    elif average != UNKNOWN and float(average) >= 6:
        hours_verdict = '⚠️ ساعات کاری متوسط'
    else:
        hours_verdict = '❌ نیاز به بررسی ساعات کاری'

    challenges = '⚠️ وجود چالش‌هایی که نیاز به بررسی دارند' if stats['challenges'] > 0 else '✅ عدم گزارش چالش خاص'
    achievements = '🏆 ثبت دستاوردهای مثبت' if stats['achievements'] > 0 else '⚠️ عدم ثبت دستاوردهای مشخص'
    today = jdatetime.date.today().strftime('%Y/%m/%d')

    return f"""
# 📊 تحلیل خودکار گزارشات {user_name}

⚠️ **توجه:** سرویس تحلیل هوش مصنوعی در دسترس نیست. این تحلیل بر اساس آمار خام داده‌ها تهیه شده است.

## 📈 خلاصه کلی عملکرد
در بازه زمانی {start_date} تا {end_date}، همکار {user_name} تعداد {count} گزارش روزانه ثبت کرده است.

## 📊 آمار کلیدی
- **تعداد روزهای گزارش شده:** {count} روز
- **مجموع ساعات کاری:** {stats['total_hours']} ساعت
- **میانگین ساعات کاری روزانه:** {average} ساعت
- **تعداد چالش‌های ثبت شده:** {stats['challenges']} مورد
- **تعداد دستاورد‌های ثبت شده:** {stats['achievements']} مورد

## 🎯 ارزیابی اولیه
{discipline}

{hours_verdict}

{challenges}

{achievements}

## 💡 توصیه‌های کلی
- برای تحلیل دقیق‌تر، لطفاً از سرویس تحلیل هوش مصنوعی استفاده کنید
- بررسی جزئیات گزارشات برای درک بهتر عملکرد
- پیگیری چالش‌های ثبت شده و ارائه راهکار

**تاریخ تحلیل:** {today}
"""


def voice_fallback_analysis(user_name, start_date, end_date, reports):
    """Shorter plain-text fallback read out by the voice assistant"""
    stats = report_statistics(reports)
    count = stats['count']
    average = stats['average_hours']

    discipline = '✅ انضباط خوب در گزارش‌دهی' if count >= 5 else '⚠️ نیاز به بهبود در گزارش‌دهی'
    if average != UNKNOWN and float(average) >= 8:
        hours_verdict = '✅ ساعات کاری مناسب'
    else:
        hours_verdict = '⚠️ نیاز به بررسی ساعات کاری'

    return f"""
📊 تحلیل خودکار گزارشات {user_name}

⚠️ سرویس تحلیل هوش مصنوعی در دسترس نیست.

📈 خلاصه کلی عملکرد:
در بازه زمانی {start_date} تا {end_date}، همکار {user_name} تعداد {count} گزارش روزانه ثبت کرده است.

📊 آمار کلیدی:
- تعداد روزهای گزارش شده: {count} روز
- مجموع ساعات کاری: {stats['total_hours']} ساعت
- میانگین ساعات کاری روزانه: {average} ساعت
- تعداد چالش‌های ثبت شده: {stats['challenges']} مورد
- تعداد دستاورد‌های ثبت شده: {stats['achievements']} مورد

🎯 ارزیابی اولیه:
{discipline}
{hours_verdict}
"""
