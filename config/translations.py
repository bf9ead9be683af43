"""Bilingual string tables (Thai / English).

Symptoms are stored in the session by key and resolved to a label only when
they are shown or sent to the model, so switching language mid-session never
leaves mixed-language selections behind.
"""
from typing import Dict

SUPPORTED_LANGUAGES = ("th", "en")

# Common symptoms offered on the symptom step, keyed by a stable identifier
COMMON_SYMPTOMS: Dict[str, Dict[str, str]] = {
    "headache": {"th": "ปวดศีรษะ", "en": "Headache"},
    "dizziness": {"th": "เวียนศีรษะ", "en": "Dizziness"},
    "fever": {"th": "ตัวร้อน/ไข้", "en": "Fever"},
    "bloating": {"th": "ท้องอืด", "en": "Bloating"},
    "fatigue": {"th": "อ่อนเพลีย", "en": "Fatigue"},
    "muscle_pain": {"th": "ปวดเมื่อยกล้ามเนื้อ", "en": "Muscle Pain"},
    "insomnia": {"th": "นอนไม่หลับ", "en": "Insomnia"},
    "cough": {"th": "ไอ", "en": "Cough"},
    "skin_rash": {"th": "ผื่นคัน", "en": "Skin Rash"},
}

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "th": {
        "appTitle": "ระบบวินิจฉัยแพทย์แผนไทย",
        "appSubtitle": "วิเคราะห์สมุฏฐาน 4 ด้วย AI",
        "stepProfile": "ข้อมูลผู้ป่วย",
        "stepSymptoms": "อาการ",
        "stepContext": "สภาพแวดล้อม",
        "stepResults": "ผลวินิจฉัย",
        "patientProfile": "ข้อมูลผู้ป่วย",
        "fullName": "ชื่อ-นามสกุล",
        "birthDate": "วันเกิด",
        "gender": "เพศ",
        "male": "ชาย",
        "female": "หญิง",
        "other": "อื่นๆ",
        "birthElementTitle": "ธาตุเจ้าเรือน",
        "birthElementDesc": "ตามวันเกิด ธาตุเจ้าเรือนของคุณคือ",
        "currentSymptoms": "อาการปัจจุบัน",
        "symptomsSubtitle": "เลือกอาการที่คุณกำลังเป็นอยู่",
        "additionalNotes": "บันทึกเพิ่มเติม",
        "envSamutthan": "สมุฏฐานสิ่งแวดล้อม",
        "kalaSamutthan": "กาลสมุฏฐาน (เวลา)",
        "kalaDesc": "เวลาที่เริ่มมีอาการ (HH:MM)",
        "utuSamutthan": "อุตุสมุฏฐาน (ฤดูกาล)",
        "temperature": "อุณหภูมิ",
        "condition": "สภาพอากาศ",
        "currentSeason": "ฤดูปัจจุบัน",
        "analyzing": "กำลังวิเคราะห์...",
        "reportTitle": "รายงานข้อมูลผู้ป่วย",
        "reportTime": "เวลาบันทึก",
        "diagnosisSummary": "สรุปผลการวินิจฉัย",
        "imbalanceSuffix": "กำเริบ",
        "elementLabel": "ธาตุเจ้าเรือน",
        "seasonFactor": "ปัจจัยฤดูกาล",
        "ageFactor": "ปัจจัยอายุ",
        "aiLogic": "หลักการวิเคราะห์",
        "dietaryCare": "อาหาร",
        "lifestyle": "การดำเนินชีวิต",
        "herbs": "สมุนไพร",
        "notice": "ข้อควรทราบ",
        "noticeText": "ผลการวิเคราะห์นี้เป็นข้อมูลเบื้องต้นเท่านั้น ไม่ใช่การวินิจฉัยทางการแพทย์ กรุณาปรึกษาแพทย์แผนไทยหรือแพทย์ผู้เชี่ยวชาญ",
        "analysisFailed": "การวิเคราะห์ล้มเหลว กรุณาลองใหม่",
        "exportFailed": "การสร้างรายงานล้มเหลว",
        "reportSaved": "บันทึกรายงานแล้ว",
        "nameRequired": "กรุณากรอกชื่อ",
        "symptomRequired": "กรุณาเลือกอาการอย่างน้อย 1 อาการ",
        "navHint": "พิมพ์ < เพื่อย้อนกลับ  ! เพื่อสลับภาษา  q เพื่อออก",
    },
    "en": {
        "appTitle": "Thai Traditional Medicine Diagnosis",
        "appSubtitle": "AI-assisted Samutthan 4 analysis",
        "stepProfile": "Profile",
        "stepSymptoms": "Symptoms",
        "stepContext": "Context",
        "stepResults": "Results",
        "patientProfile": "Patient Profile",
        "fullName": "Full Name",
        "birthDate": "Birth Date",
        "gender": "Gender",
        "male": "Male",
        "female": "Female",
        "other": "Other",
        "birthElementTitle": "Birth Element (Chao Ruean)",
        "birthElementDesc": "Based on your birth date, your birth element is",
        "currentSymptoms": "Current Symptoms",
        "symptomsSubtitle": "Select the symptoms you are experiencing",
        "additionalNotes": "Additional Notes",
        "envSamutthan": "Environmental Samutthan",
        "kalaSamutthan": "Kala Samutthan (Time)",
        "kalaDesc": "Time of symptom onset (HH:MM)",
        "utuSamutthan": "Utu Samutthan (Season)",
        "temperature": "Temperature",
        "condition": "Condition",
        "currentSeason": "Current Season",
        "analyzing": "Analyzing...",
        "reportTitle": "Patient Medical Report",
        "reportTime": "Report Time",
        "diagnosisSummary": "Diagnosis Summary",
        "imbalanceSuffix": "Imbalance",
        "elementLabel": "Birth Element",
        "seasonFactor": "Season Factor",
        "ageFactor": "Age Factor",
        "aiLogic": "Analysis Logic",
        "dietaryCare": "Dietary Care",
        "lifestyle": "Lifestyle",
        "herbs": "Herbs",
        "notice": "Notice",
        "noticeText": "This analysis is for informational purposes only and is not a medical diagnosis. Please consult a Thai Traditional Medicine practitioner or a physician.",
        "analysisFailed": "Analysis failed. Please try again.",
        "exportFailed": "Report export failed",
        "reportSaved": "Report saved",
        "nameRequired": "Please enter a name.",
        "symptomRequired": "Please select at least one symptom.",
        "navHint": "Type < to go back, ! to switch language or q to quit.",
    },
}


def _lang(lang: str) -> str:
    return lang if lang in SUPPORTED_LANGUAGES else "th"


def t(lang: str, key: str) -> str:
    """Look up a UI string; unknown keys are returned as-is."""
    return TRANSLATIONS[_lang(lang)].get(key, key)


def symptom_label(key: str, lang: str) -> str:
    """Resolve a symptom key to its label. Free-text entries pass through."""
    labels = COMMON_SYMPTOMS.get(key)
    if labels is None:
        return key
    return labels[_lang(lang)]
