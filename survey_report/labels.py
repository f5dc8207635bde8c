"""
Display strings for coded survey values and report captions.

Each locale table has the same shape:

- ``fields``: field name -> code -> display string
- ``field_titles``: field name -> row caption
- ``levels``: level code -> display string
- ``categories``: category code (plus ``overall``) -> section title
- ``questions``: question key -> full question text
- ``text``: report captions keyed by purpose

Lookups are fail-open: an unknown code comes back unchanged.
"""

from datetime import date
from typing import Any, Dict, Iterable, Optional

from .models import Level

PLACEHOLDER = "-"

LABELS_TH: Dict[str, Any] = {
    "fields": {
        "gender": {"male": "ชาย", "female": "หญิง"},
        "age_group": {"12-15": "12-15 ปี", "16-18": "16-18 ปี"},
        "education_level": {"junior": "ม.ต้น (ม.1-ม.3)", "senior": "ม.ปลาย (ม.4-ม.6)"},
        "bmi": {"underweight": "ผอมกว่าเกณฑ์", "normal": "สมส่วน", "overweight": "ท้วม/เริ่มอ้วน", "obese": "อ้วน"},
        "daily_allowance": {
            "below50": "ต่ำกว่า 50 บาท",
            "51-100": "51-100 บาท",
            "101-150": "101-150 บาท",
            "above150": "มากกว่า 150 บาท",
        },
        "purchase_frequency": {
            "daily": "ทุกวัน",
            "3-4times": "3-4 ครั้ง/สัปดาห์",
            "1-2times": "1-2 ครั้ง/สัปดาห์",
            "rarely": "นานๆ ครั้ง",
        },
        "sugar_level": {"100%": "หวานปกติ (100%)", "50%": "หวานน้อย (50%)", "extra": "หวานมาก", "none": "ไม่ใส่น้ำตาล"},
        "daily_expense": {
            "below20": "ต่ำกว่า 20 บาท",
            "20-40": "20-40 บาท",
            "41-60": "41-60 บาท",
            "above60": "มากกว่า 60 บาท",
        },
        "purchase_time": {"morning": "ก่อนเข้าเรียน", "lunch": "พักกลางวัน", "afternoon": "หลังเลิกเรียน", "break": "พักเบรก"},
        "drink_types": {
            "soda": "น้ำอัดลม",
            "tea": "ชาเขียว/ชานม",
            "yogurt": "นมเปรี้ยว/โยเกิร์ต",
            "juice": "น้ำผลไม้",
            "energy": "เครื่องดื่มชูกำลัง",
        },
        "purchase_reason": {
            "taste": "รสชาติอร่อย",
            "thirst": "แก้กระหาย",
            "price": "ราคาถูก",
            "friends": "เพื่อนชวน",
            "habit": "ความเคยชิน",
        },
        "purchase_factors": {
            "rule": "กฎโรงเรียน",
            "only": "ทางเลือกเดียว",
            "time": "เวลาจำกัด",
            "convenience": "สะดวก",
            "none": "ไม่มีข้อจำกัด",
        },
    },
    "field_titles": {
        "gender": "เพศ",
        "age_group": "ช่วงอายุ",
        "education_level": "ระดับชั้น",
        "bmi": "ดัชนีมวลกาย",
        "daily_allowance": "รายได้/ค่าขนมต่อวัน",
        "purchase_frequency": "ความถี่ในการซื้อ",
        "purchase_time": "ช่วงเวลาที่นิยมซื้อ",
        "drink_types": "ประเภทเครื่องดื่ม",
        "sugar_level": "ระดับความหวาน",
        "purchase_reason": "เหตุผลในการซื้อ",
        "purchase_factors": "ปัจจัยที่จำกัดการเลือกซื้อ",
        "daily_expense": "ค่าใช้จ่ายต่อวัน",
    },
    "levels": {
        "highest": "มากที่สุด",
        "high": "มาก",
        "moderate": "ปานกลาง",
        "low": "น้อย",
        "lowest": "น้อยที่สุด",
    },
    "categories": {
        "knowledge": "1. ด้านความรู้ความเข้าใจ",
        "awareness": "2. ด้านความตระหนักต่อสุขภาพ",
        "intention": "3. ด้านความตั้งใจและการปรับเปลี่ยนพฤติกรรม",
        "overall": "รวมทั้งหมด",
    },
    "questions": {
        "knowledge1": "1.1 ท่านทราบว่าร่างกายไม่ควรได้รับน้ำตาลเกิน 6 ช้อนชาต่อวัน",
        "knowledge2": "1.2 ท่านทราบว่าเครื่องดื่ม 1 แก้ว/ขวด มีน้ำตาลเกินปริมาณที่แนะนำ",
        "knowledge3": "1.3 ท่านอ่านฉลากโภชนาการก่อนตัดสินใจซื้อ",
        "awareness1": "2.1 ท่านคิดว่าพฤติกรรมการดื่มของท่านเสี่ยงต่อโรคเบาหวาน",
        "awareness2": "2.2 ท่านเคยมีอาการอ่อนเพลีย หงุดหงิด เมื่อไม่ได้ดื่มน้ำหวาน",
        "awareness3": "2.3 ท่านคิดว่าน้ำหนักตัวเพิ่มขึ้นจากการดื่มเครื่องดื่มรสหวาน",
        "awareness4": "2.4 ท่านกังวลเรื่องฟันผุจากการดื่มเครื่องดื่มที่มีน้ำตาล",
        "intention1": "3.1 ท่านมีความตั้งใจที่จะลดปริมาณการดื่มเครื่องดื่มรสหวาน",
        "intention2": "3.2 ท่านเชื่อว่าสามารถควบคุมความอยากดื่มน้ำหวานได้",
        "intention3": "3.3 ท่านยินดีเลือกดื่มน้ำเปล่าหรือเครื่องดื่มไม่ใส่น้ำตาลแทน",
        "intention4": "3.4 ท่านพร้อมที่จะแนะนำเพื่อนหรือคนรอบข้างให้ลดการบริโภคน้ำตาล",
    },
    "months": (
        "มกราคม", "กุมภาพันธ์", "มีนาคม", "เมษายน", "พฤษภาคม", "มิถุนายน",
        "กรกฎาคม", "สิงหาคม", "กันยายน", "ตุลาคม", "พฤศจิกายน", "ธันวาคม",
    ),
    "year_offset": 543,
    "text": {
        "individual_title": "รายงานผลแบบสอบถามรายบุคคล",
        "summary_title": "รายงานสรุปผลแบบสอบถาม",
        "continued": "(ต่อ)",
        "subtitle": "การศึกษาพฤติกรรมการเลือกซื้อเครื่องดื่มผสมน้ำตาลในสหกรณ์โรงเรียน",
        "response_id": "รหัสแบบสอบถาม",
        "response_date": "วันที่ตอบ",
        "respondents": "จำนวนผู้ตอบทั้งหมด",
        "persons": "คน",
        "generated_on": "วันที่สร้างรายงาน",
        "part1": "ตอนที่ 1: ข้อมูลทั่วไปของผู้ตอบแบบสอบถาม",
        "part2": "ตอนที่ 2: พฤติกรรมการเลือกซื้อเครื่องดื่มผสมน้ำตาล",
        "part3": "ตอนที่ 3: ความเสี่ยงต่อสุขภาพจากการบริโภคน้ำตาลสูง",
        "part4": "ตอนที่ 4: ข้อเสนอแนะเพิ่มเติม",
        "overall_section": "สรุปผลรวมทุกด้าน",
        "col_item": "รายการ",
        "col_value": "ข้อมูล",
        "col_group": "ข้อมูลทั่วไป",
        "col_n": "จำนวน (n)",
        "col_pct": "ร้อยละ (%)",
        "col_question": "ข้อคำถาม",
        "col_score": "คะแนน",
        "col_level": "ระดับ",
        "col_mean": "x̄",
        "col_sd": "S.D.",
        "col_category": "ด้าน",
        "col_items": "จำนวนข้อ",
        "total": "รวม",
        "category_mean": "ค่าเฉลี่ยด้าน",
        "category_total": "รวมด้าน",
        "overall_mean": "ค่าเฉลี่ยรวมทุกด้าน",
        "legend_title": "เกณฑ์การแปลผลค่าเฉลี่ย",
        "legend_mean": "ค่าเฉลี่ย",
        "page": "หน้า",
        "footer": "โรงเรียนอาจสามารถวิทยา - รายวิชา IS",
        "multi_note": "ตอบได้มากกว่า 1 ข้อ ร้อยละคิดจากจำนวนผู้ตอบ",
        "items_suffix": "ข้อ",
        "individual_file": "รายงานแบบสอบถาม",
        "summary_file": "รายงานสรุปแบบสอบถาม",
    },
}

LABELS_EN: Dict[str, Any] = {
    "fields": {
        "gender": {"male": "Male", "female": "Female"},
        "age_group": {"12-15": "12-15 years", "16-18": "16-18 years"},
        "education_level": {"junior": "Lower secondary (M.1-M.3)", "senior": "Upper secondary (M.4-M.6)"},
        "bmi": {"underweight": "Underweight", "normal": "Normal", "overweight": "Overweight", "obese": "Obese"},
        "daily_allowance": {
            "below50": "Below 50 THB",
            "51-100": "51-100 THB",
            "101-150": "101-150 THB",
            "above150": "Above 150 THB",
        },
        "purchase_frequency": {
            "daily": "Every day",
            "3-4times": "3-4 times/week",
            "1-2times": "1-2 times/week",
            "rarely": "Rarely",
        },
        "sugar_level": {"100%": "Regular (100%)", "50%": "Less sweet (50%)", "extra": "Extra sweet", "none": "No sugar"},
        "daily_expense": {
            "below20": "Below 20 THB",
            "20-40": "20-40 THB",
            "41-60": "41-60 THB",
            "above60": "Above 60 THB",
        },
        "purchase_time": {"morning": "Before class", "lunch": "Lunch break", "afternoon": "After school", "break": "Short break"},
        "drink_types": {
            "soda": "Soft drinks",
            "tea": "Green tea/milk tea",
            "yogurt": "Drinking yogurt",
            "juice": "Fruit juice",
            "energy": "Energy drinks",
        },
        "purchase_reason": {
            "taste": "Taste",
            "thirst": "Thirst",
            "price": "Low price",
            "friends": "Friends",
            "habit": "Habit",
        },
        "purchase_factors": {
            "rule": "School rules",
            "only": "Only option",
            "time": "Limited time",
            "convenience": "Convenience",
            "none": "No constraint",
        },
    },
    "field_titles": {
        "gender": "Gender",
        "age_group": "Age group",
        "education_level": "Education level",
        "bmi": "BMI",
        "daily_allowance": "Daily allowance",
        "purchase_frequency": "Purchase frequency",
        "purchase_time": "Purchase time",
        "drink_types": "Drink types",
        "sugar_level": "Sugar level",
        "purchase_reason": "Purchase reason",
        "purchase_factors": "Limiting factors",
        "daily_expense": "Daily expense",
    },
    "levels": {
        "highest": "Highest",
        "high": "High",
        "moderate": "Moderate",
        "low": "Low",
        "lowest": "Lowest",
    },
    "categories": {
        "knowledge": "1. Knowledge",
        "awareness": "2. Health awareness",
        "intention": "3. Intention to change",
        "overall": "Overall",
    },
    "questions": {
        "knowledge1": "1.1 I know the body should not take more than 6 teaspoons of sugar a day",
        "knowledge2": "1.2 I know one cup/bottle of these drinks exceeds the recommended sugar",
        "knowledge3": "1.3 I read the nutrition label before buying",
        "awareness1": "2.1 My drinking habits put me at risk of diabetes",
        "awareness2": "2.2 I feel tired or irritable when I do not have a sweet drink",
        "awareness3": "2.3 My weight has increased because of sweet drinks",
        "awareness4": "2.4 I worry about tooth decay from sugary drinks",
        "intention1": "3.1 I intend to drink fewer sweet drinks",
        "intention2": "3.2 I believe I can control my craving for sweet drinks",
        "intention3": "3.3 I would choose water or unsweetened drinks instead",
        "intention4": "3.4 I am ready to encourage others to cut down on sugar",
    },
    "months": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    "year_offset": 0,
    "text": {
        "individual_title": "Individual Survey Report",
        "summary_title": "Survey Summary Report",
        "continued": "(continued)",
        "subtitle": "Sugary drink purchasing behavior at the school cooperative store",
        "response_id": "Response ID",
        "response_date": "Answered on",
        "respondents": "Total respondents",
        "persons": "",
        "generated_on": "Generated on",
        "part1": "Part 1: Respondent information",
        "part2": "Part 2: Purchasing behavior",
        "part3": "Part 3: Health risk from high sugar intake",
        "part4": "Part 4: Suggestions",
        "overall_section": "Overall summary",
        "col_item": "Item",
        "col_value": "Answer",
        "col_group": "Group",
        "col_n": "n",
        "col_pct": "%",
        "col_question": "Question",
        "col_score": "Score",
        "col_level": "Level",
        "col_mean": "Mean",
        "col_sd": "S.D.",
        "col_category": "Category",
        "col_items": "Items",
        "total": "Total",
        "category_mean": "Mean",
        "category_total": "Total",
        "overall_mean": "Overall mean",
        "legend_title": "Interpretation of means",
        "legend_mean": "Mean",
        "page": "Page",
        "footer": "Ardsamart Wittaya School - IS course",
        "multi_note": "Multiple answers allowed; percentages are of respondents",
        "items_suffix": "items",
        "individual_file": "survey-report",
        "summary_file": "survey-summary",
    },
}

LOCALES: Dict[str, Dict[str, Any]] = {"th": LABELS_TH, "en": LABELS_EN}
DEFAULT_LOCALE = "th"


class LabelResolver:
    """Lookups over one locale table."""

    def __init__(self, table: Optional[Dict[str, Any]] = None):
        self.table = table if table is not None else LOCALES[DEFAULT_LOCALE]

    @classmethod
    def for_locale(cls, locale: str) -> "LabelResolver":
        if locale not in LOCALES:
            raise ValueError(f"Unknown locale: {locale!r} (expected one of {sorted(LOCALES)})")
        return cls(LOCALES[locale])

    def label(self, category: str, code: Any) -> str:
        codes = self.table["fields"].get(category, {})
        try:
            return codes.get(code, code)
        except TypeError:  # unhashable code, e.g. a list
            return code

    def label_list(self, category: str, codes: Optional[Iterable[Any]]) -> str:
        values = list(codes or [])
        if not values:
            return PLACEHOLDER
        return ", ".join(str(self.label(category, c)) for c in values)

    def field_title(self, name: str) -> str:
        return self.table["field_titles"].get(name, name)

    def level(self, level: Level) -> str:
        code = Level(level).value
        return self.table["levels"].get(code, code)

    def category(self, code: str) -> str:
        return self.table["categories"].get(code, code)

    def question(self, key: str) -> str:
        return self.table["questions"].get(key, key)

    def text(self, key: str) -> str:
        return self.table["text"].get(key, key)

    def date(self, value: date) -> str:
        month = self.table["months"][value.month - 1]
        return f"{value.day} {month} {value.year + self.table['year_offset']}"


_default = LabelResolver()


def label(category: str, code: Any) -> str:
    return _default.label(category, code)


def label_list(category: str, codes: Optional[Iterable[Any]]) -> str:
    return _default.label_list(category, codes)
