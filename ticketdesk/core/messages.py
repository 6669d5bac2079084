# Customer-facing reply texts. Kept in one place so wording changes do not
# touch routing or matching code.

SEARCH_USAGE = (
    "⚠️ รูปแบบที่ถูกต้อง:\n"
    "• ค้นหา [ชื่อ] หรือ [เบอร์โทร] → ค้นหาทุกคอนเสิร์ตในระบบ\n"
    "• ค้นหา [คำค้น] ใน [ชื่อคอนเสิร์ต] → ค้นหาเฉพาะคอนเสิร์ตนั้น\n"
    "\n📌 หมายเหตุ: การค้นหาด้วย \"ลำดับคิว\" (เช่น ค้นหา 5) จะใช้ได้เฉพาะเมื่อระบุชื่อคอนเสิร์ตเท่านั้น\n"
    "ตัวอย่าง:\nค้นหา itstudent\nค้นหา itstudent ใน SupalaiConcert\nค้นหา 5 ใน Blackpink2025"
)

UID_LOOKUP_USAGE = (
    "⚠️ รูปแบบไม่ถูกต้องค่ะ\n"
    "โปรดใช้รูปแบบ: เช็คที่นั่ง {UID} ใน {ชื่อคอนเสิร์ต}"
)

JOIN_GREETING = (
    "สวัสดีค่า 🐰💗 ขอบคุณที่เพิ่มบอทเข้ากลุ่มนะคะ\n"
    "บอทจะช่วยค้นหาข้อมูลคิวและตรวจสอบสลิปให้ค่ะ"
)

ONBOARDING_GUIDE = """♡ 𓈒 ᐟ สวัสดีค่า ยินดีต้อนรับสู่บริการกดบัตรนะคะ 🐰💗
ขั้นตอนการรับคิวกดบัตรผ่าน LINE OA ⤵

1) ลูกค้าส่งรายละเอียดงาน ✅
 └ ชื่องาน + โซน/ราคา + จำนวนบัตรที่ต้องการ

2) ร้านส่งฟอร์มข้อตกลงให้ลูกค้าอ่าน ✍️
 └ ลูกค้ากรอกยืนยันรับทราบเงื่อนไข

3) ร้านแจ้งยอดมัดจำ + ส่งฟอร์มมัดจำ 💸
 └ ลูกค้าโอนมัดจำ → ส่งสลิป → กรอกฟอร์มยืนยันคิว
🕘 หากไม่โอนภายในเวลาที่กำหนด ระบบจะถือว่าสละสิทธิ์คิวอัตโนมัตินะคะ

4) ร้านส่งฟอร์มรายละเอียดกดบัตรให้กรอก 🎟️

5) หากฝากร้านชำระค่าบัตร 💳
 └ ใกล้วันกด ร้านจะแจ้งยอดชำระค่าบัตร + ส่งฟอร์มให้กรอก

6) สถานะ: รอวันกดบัตร ⏳

7) วันกดบัตร 🎫
 └ ร้านแจ้งสแตนบาย + อัปเดตสถานการณ์ในไลน์นี้

8) หากกดได้ ✅
 └ ร้านส่งรายละเอียดบัตร + สรุปยอดค่ากด

9) หากกดไม่ได้ ❌
 └ ร้านส่งฟอร์มคืนเงินให้กรอก และโอนคืนตามเงื่อนไขร้าน

📎 ระบบเก็บข้อมูล+สลิปทุกออเดอร์เพื่อความปลอดภัยค่ะ
พร้อมเริ่มแล้ว ส่งรายละเอียดงานได้เลยนะคะ 💬🌷"""

CUSTOMER_ID = "รหัสลูกค้าคือ: {user_id}"

STOP_CONFIRMED = "รับทราบค่ะ 🛑 หยุดกดบัตรให้เรียบร้อยแล้วนะคะ ({concert})"
STOP_NOT_FOUND = "❌ ไม่พบข้อมูลในระบบค่ะ"
STOP_GROUP_NOTICE = (
    "[🛑 หยุดกด – ลูกค้าได้บัตรเองแล้ว]\n\n"
    "งาน: {concert}\n"
    "คิว: {queue}\n"
    "รอบการแสดง: {round}\n"
    "ลูกค้า: (UID: {uid})\n"
    "โดย: {operator} | เวลา: {notified_at}"
)
STOP_OPERATOR = "ลูกค้า (ผ่าน LINE OA)"

CONCERT_NOT_FOUND = "❌ ไม่พบคอนเสิร์ตชื่อ \"{concert}\" ใน Master Sheet"
KEYWORD_NOT_FOUND_NAMED = "❌ ไม่พบ \"{keyword}\" ในคอนเสิร์ต \"{concert}\""
KEYWORD_NOT_FOUND_ALL = "❌ ไม่พบ \"{keyword}\" ในทุกคอนเสิร์ตใน Master Sheet"
SEARCH_HIT = "🎟️ [{concert} - {tab}]\nลำดับ: {order}\nชื่อ: {name}\nเบอร์: {phone}\nUID: {uid}"

UID_NOT_FOUND = "❌ ไม่พบ UID \"{uid}\" ในคอนเสิร์ต \"{concert}\""
CONCERT_UNREADABLE = "⚠️ ไม่สามารถอ่านข้อมูลคอนเสิร์ต \"{concert}\" ได้"
SEAT_DETAILS = (
    "♡ 𝚞𝚙𝚍𝚊𝚝𝚎 : แจ้งที่นั่งแล้วน้า ♡ 𓈒 ᐟ 🎟️✨\n"
    "🎟️ งาน: {concert}\n"
    "📅 วันแสดง: {round}\n"
    "💸 ราคา: {price} บาท\n"
    "📍 โซนและที่นั่ง: {zone}\n"
    "💺 จำนวน: {count} ใบ\n\n"
    "{order_link}"
)

SLIP_DUPLICATE = """⚠️ สลิปนี้ถูกใช้งานในระบบแล้วค่ะ
(This slip has already been used.)

หากลูกค้าส่งสลิปเดิมซ้ำจากความผิดพลาด
สามารถแจ้งแอดมินเพื่อตรวจสอบได้เลยนะคะ 🤍✨
(Please contact admin for manual review if needed.)"""

SLIP_RECEIVER_MISMATCH = """❌ ขออภัยค่ะ ยังไม่พบข้อมูลสลิปนี้ในระบบนะคะ
(Slip not found in our system.)

บอทตรวจสอบเฉพาะยอดที่โอนเข้าบัญชีร้านเท่านั้นนะคะ
(The system only detects transfers to the official account.)

หากโอนไปบัญชีอื่นหรือสงสัยเพิ่มเติม
แจ้งแอดมินเพื่อตรวจสอบได้เลยค่ะ 🤍✨
(Please contact admin for assistance.)"""

SLIP_ACCEPTED = (
    "✅ ตรวจสอบสลิปเรียบร้อยค่ะ ♡\n"
    "(Payment verified successfully.)\n\n"
    "📅 วันที่โอน: {date}\n"
    "⏰ เวลา: {time}\n"
    "💸 จำนวนเงิน: {amount} บาท\n"
    "🏦 จากบัญชี: {sender_bank} ({sender_account})\n\n"
    "ยอดเข้าบัญชีร้านเรียบร้อยแล้วนะคะ ขอบคุณค่ะ 🐰🌷\n"
    "(Your payment has been received. Thank you!)"
)

SLIP_FAILED = "⚠️ เกิดข้อผิดพลาดระหว่างตรวจสอบสลิปค่ะ กรุณาลองใหม่อีกครั้ง"
GENERIC_FAILURE = "⚠️ ขออภัยค่ะ ระบบขัดข้องชั่วคราว กรุณาลองใหม่อีกครั้ง"
