# Default Seoul trip, used to seed an empty item store.
# Items are listed in display order; sort_order is assigned from the list index.

DATASET_VERSION = 3

TRIP_DAYS = [
    {
        "day": 1,
        "date": "2026-03-24",
        "weekday": "週二",
        "items": [
            {
                "id": "d1-0", "time": "04:30", "title": "抵達機場", "type": "transport",
                "description": "機場接送預約 04:00",
                "location": "Taoyuan International Airport",
                "transferInfo": {
                    "pickupTime": "04:00",
                    "provider": "機場接送服務",
                    "details": "於住家樓下接送。",
                },
            },
            {
                "id": "d1-1", "time": "07:05", "title": "起飛：桃園國際機場 Terminal 2", "type": "transport",
                "description": "長榮航空 EVA Air BR170",
                "location": "Taoyuan International Airport Terminal 2",
                "ticketInfo": {"flight": "BR170", "from": "TPE Terminal 2", "to": "ICN Terminal 1",
                               "date": "24Mar2026"},
            },
            {
                "id": "d1-2", "time": "10:30", "title": "抵達：仁川國際機場 Terminal 1", "type": "transport",
                "description": "入境、領行李",
                "location": "Incheon International Airport Terminal 1",
            },
            {
                "id": "d1-3", "time": "11:28", "title": "仁川機場快線(AREX)", "type": "transport",
                "description": "搭乘直達車 仁川機場T1出發往首爾站方向。班次：11:28/12:08",
                "location": "Incheon International Airport Terminal 1 Station",
                "notes": "請整理機台買票教學",
            },
            {
                "id": "d1-5", "time": "12:40", "title": "住宿：明洞Le Seoul Hotel", "type": "accommodation",
                "description": "先寄放行李，15:00 Check in。",
                "location": "Le Seoul Hotel",
                "koreanAddress": "서울 중구 남대문로1길 56",
                "naverMapLink": "https://naver.me/5ncJ7z1u",
                "notes": "HighFloor, Away from elevator",
            },
            {
                "id": "d1-7", "time": "13:30", "title": "午餐：白玉豬肉湯飯 (백옥 명동)", "type": "food",
                "description": "明洞必吃豬肉湯飯",
                "location": "Baekok Myeongdong",
                "koreanAddress": "서울 중구 명동8길 8-23 지하1층, 1층",
            },
            {
                "id": "d1-10", "time": "15:30", "title": "行程：解放村 (해방촌)", "type": "sight",
                "location": "Haebangchon",
                "koreanAddress": "서울 용산구 신흥로 95-9 2층",
            },
            {
                "id": "d1-13", "time": "19:00", "title": "晚餐：延南豬腳 1987 (연남족발 1987)", "type": "food",
                "description": "鐘閣店 (종각점)",
                "location": "Yeonnam Jokbal 1987 Jonggak",
                "koreanAddress": "서울 종로구 삼일대로15길 26 1층",
            },
            {
                "id": "d1-14", "time": "20:30", "title": "行程：清溪川 (청계천)", "type": "sight",
                "location": "Cheonggyecheon",
                "koreanAddress": "서울 중구 태평로1가 1",
            },
            {
                "id": "d1-15", "time": "21:30", "title": "行程：明洞逛街", "type": "shopping",
                "location": "Myeongdong Shopping Street",
                "koreanAddress": "서울 중구 명동",
            },
        ],
    },
    {
        "day": 2,
        "date": "2026-03-25",
        "weekday": "週三",
        "items": [
            {
                "id": "d2-1", "time": "10:00", "title": "地鐵：市廳站 (시청역) -> 安國站 (안국역)", "type": "transport",
                "description": "深藍1號線-鐘路三街轉-橘色3號線",
                "location": "Anguk Station",
            },
            {
                "id": "d2-2", "time": "10:00", "title": "先去無垢屋抽號碼牌", "type": "activity",
                "description": "先去抽號碼牌！",
                "location": "Mugiro",
                "koreanAddress": "서울 종로구 율곡로1길 7",
            },
            {
                "id": "d2-3", "time": "10:30", "title": "早餐：Artist Bakery (아티스트베이커리 안국)", "type": "food",
                "location": "Artist Bakery",
                "koreanAddress": "서울 종로구 율곡로 45 1층",
            },
            {
                "id": "d2-4", "time": "11:30", "title": "午餐：無垢屋 人蔘雞湯 (무구옥)", "type": "food",
                "description": "營業時間：11:30–14:00/17:30–20:00",
                "location": "Mugiro",
                "koreanAddress": "서울 종로구 율곡로1길 7 지상1층",
            },
            {
                "id": "d2-6", "time": "15:00", "title": "行程：北村韓屋 (북촌한옥마을)", "type": "sight",
                "location": "Bukchon Hanok Village",
                "koreanAddress": "서울 종로구 계동길 37",
            },
            {
                "id": "d2-8", "time": "17:00", "title": "行程：西巡邏街 & 益善洞韓屋村", "type": "sight",
                "location": "Ikseon-dong Hanok Village",
                "koreanAddress": "서울 종로구 익선동",
            },
            {
                "id": "d2-9", "time": "18:00", "title": "晚餐：南道粉食 益善店 (남도분식 익선점)", "type": "food",
                "description": "韓式小吃辣炒年糕",
                "location": "Namdo Bunsik Ikseon",
                "koreanAddress": "서울 종로구 수표로28길 33",
            },
            {
                "id": "d2-10", "time": "20:00", "title": "宵夜：鐘路三街布帳馬車", "type": "food",
                "description": "體驗韓國路邊攤文化",
                "location": "Jongno 3-ga Station",
            },
        ],
    },
    {
        "day": 3,
        "date": "2026-03-26",
        "weekday": "週四",
        "items": [
            {
                "id": "d3-1", "time": "10:30", "title": "地鐵：市廳站 (시청역) -> 聖水站 (성수역)", "type": "transport",
                "description": "綠色2號線",
                "location": "Seongsu Station",
            },
            {
                "id": "d3-2", "time": "11:00", "title": "午餐：陵洞水芹菜 (능동미나리)", "type": "food",
                "description": "水芹菜牛肉湯。營業時間：09:30–00:00",
                "location": "Neungdong Minari",
                "koreanAddress": "서울 성동구 연무장길 42",
            },
            {
                "id": "d3-3", "time": "12:00", "title": "行程：聖水洞逛街", "type": "shopping",
                "location": "Seongsu-dong Cafe Street",
            },
            {
                "id": "d3-6", "time": "14:30", "title": "行程：首爾林野餐 (서울숲)", "type": "activity",
                "location": "Seoul Forest",
                "koreanAddress": "서울 성동구 뚝섬로 273",
            },
            {
                "id": "d3-8", "time": "19:00", "title": "晚餐：陳玉華一隻雞 (진옥화할매원조닭한마리)", "type": "food",
                "description": "營業時間：10:30–01:00",
                "location": "Jinokhwa Halmae Wonjo Dakhanmari",
                "koreanAddress": "서울 종로구 종로40가길 18",
            },
            {
                "id": "d3-10", "time": "21:30", "title": "行程：樂天超市 (Lotte Mart)", "type": "shopping",
                "description": "營業時間：10:00–00:00",
                "location": "Lotte Mart Seoul Station",
                "koreanAddress": "서울 중구 한강대로 405 , 2층",
            },
        ],
    },
    {
        "day": 4,
        "date": "2026-03-27",
        "weekday": "週五",
        "items": [
            {
                "id": "d4-1", "time": "11:00", "title": "午餐：朝朝刀削麵 (조조칼국수)", "type": "food",
                "description": "營業時間：10:00–21:30",
                "location": "Jojo Kalguksu",
                "koreanAddress": "서울 중구 세종대로11길 27",
            },
            {
                "id": "d4-3", "time": "13:00", "title": "行程：水聲洞溪谷 (수성동계곡)", "type": "sight",
                "location": "Suseong-dong Valley",
                "koreanAddress": "서울 종로구 옥인동 185-3",
            },
            {
                "id": "d4-5", "time": "15:00", "title": "行程：西村探索", "type": "sight",
                "description": "弼雲洞 洪建翊家屋、青瓦台文藝館、保安旅館、Ground Seesaw展覽",
                "location": "Seochon Village",
            },
            {
                "id": "d4-7", "time": "17:00", "title": "晚餐：山清炭火花園 乙支路2號店 (산청숯불가든)", "type": "food",
                "description": "營業時間：11:30–23:00。需訂位！押金Ｗ20000",
                "location": "Sancheong Charcoal Garden",
                "koreanAddress": "서울 중구 을지로14길 12 별관 2층",
                "isReservation": True,
            },
            {
                "id": "d4-8", "time": "20:00", "title": "行程：南山纜車 & N首爾塔", "type": "sight",
                "description": "搭乘纜車前往南山塔",
                "location": "N Seoul Tower",
                "koreanAddress": "서울 용산구 남산공원길 105",
            },
        ],
    },
    {
        "day": 5,
        "date": "2026-03-28",
        "weekday": "週六",
        "items": [
            {
                "id": "d5-1", "time": "11:00", "title": "地鐵：市廳站 (시청역) -> 弘大站 (홍대입구)", "type": "transport",
                "description": "綠色2號線。弘大站寄放行李。",
                "location": "Hongik University Station",
            },
            {
                "id": "d5-2", "time": "11:30", "title": "午餐：風川鰻魚 延南店 (풍천장어 연남점)", "type": "food",
                "description": "營業時間：11:30–15:30/16:30–22:20。已訂位確認中。",
                "location": "Pungcheon Eel Yeonnam",
                "koreanAddress": "서울 마포구 동교로27길 39 1층",
            },
            {
                "id": "d5-3", "time": "13:00", "title": "行程：望遠洞 (망원동)", "type": "sight",
                "location": "Mangwon Market",
            },
            {
                "id": "d5-8", "time": "21:00", "title": "住宿：Dream House (드림하우스)", "type": "accommodation",
                "description": "Check in: 14:00",
                "location": "Dream House",
                "koreanAddress": "서울 마포구 잔다리로 78",
            },
        ],
    },
    {
        "day": 6,
        "date": "2026-03-29",
        "weekday": "週日",
        "items": [
            {
                "id": "d6-1", "time": "10:00", "title": "醫美：Day beau (데이뷰의원 홍대점)", "type": "activity",
                "description": "已預約",
                "location": "Day beau",
                "koreanAddress": "서울 마포구 양화로 165 상진빌딩 4층",
            },
            {
                "id": "d6-2", "time": "11:30", "title": "午餐：Hotel De GGOODD (오뗄드꾸뜨)", "type": "food",
                "description": "營業時間：11:00–20:00",
                "location": "Hotel De GGOODD",
            },
            {
                "id": "d6-3", "time": "13:00", "title": "行程：弘大最後買東西", "type": "shopping",
                "location": "Hongdae Shopping Street",
            },
            {
                "id": "d6-7", "time": "19:45", "title": "起飛：仁川國際機場 Terminal 1", "type": "transport",
                "description": "長榮航空 EVA Air BR159",
            },
            {
                "id": "d6-8", "time": "21:25", "title": "抵達：桃園國際機場 Terminal 2", "type": "transport",
                "description": "平安回家",
            },
        ],
    },
]


def day_metadata():
    """day number -> (date, weekday)"""
    return {d["day"]: (d["date"], d["weekday"]) for d in TRIP_DAYS}
