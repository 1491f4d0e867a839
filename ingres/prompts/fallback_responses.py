"""
Canned answers used when no language model is reachable.

`offline_reply` picks a topical answer from keywords in the message;
`backup_mode_reply` is the last resort when the chat handler itself fails.
"""


WATER_SCHEMES_REPLY = """🌊 **Water Conservation Schemes You Can Apply For:**

**🏛️ Major Government Schemes:**

**1. PMKSY (Pradhan Mantri Krishi Sinchayee Yojana)**
• Subsidy: 55-75% for micro-irrigation systems
• Coverage: Drip irrigation, sprinkler systems
• Apply: Through District Agriculture Officer

**2. Atal Bhujal Yojana (Atal Jal)**
• Focus: Community-based groundwater management
• Benefits: Water harvesting infrastructure support
• Apply: Through State Water Resources Department

**3. MGNREGA Water Conservation**
• 100% wage support for water conservation works
• Includes: Farm ponds, check dams, recharge structures
• Apply: Through local Gram Panchayat

**4. National Rural Drinking Water Programme**
• Coverage: Household water connections
• Focus: Safe drinking water access
• Apply: Through District Collector Office

**📋 Application Steps:**
1. Visit nearest Agriculture/Water Department office
2. Submit land documents and application form
3. Get technical assessment done
4. Receive approval and start implementation

Would you like specific details about any of these schemes?"""


RAINWATER_HARVESTING_REPLY = """🌧️ **Rainwater Harvesting Methods:**

**🏠 Rooftop Rainwater Harvesting:**
• Cost: ₹15,000-50,000 depending on house size
• Components: Gutters, downpipes, first flush diverter, storage tank
• Government subsidy: Up to 50% in many states

**🚜 Farm Pond Construction:**
• Size: 100-500 cubic meters capacity
• Cost: ₹50,000-2,00,000 (MGNREGA provides 100% funding)
• Benefits: Irrigation + groundwater recharge

**⛲ Recharge Wells/Pits:**
• Cost: ₹10,000-30,000 per structure
• Function: Directly recharge groundwater
• Maintenance: Minimal, clean annually

**🌊 Check Dams:**
• Community-level water harvesting
• Funding: Available through watershed programs
• Apply through: District Rural Development Agency

**📋 Implementation Steps:**
1. Assess your catchment area and water needs
2. Choose appropriate method based on land/budget
3. Get technical design from agriculture department
4. Apply for government subsidy schemes
5. Implement during dry season (Oct-May)

Need help calculating capacity for your specific area?"""


GROUNDWATER_STATUS_REPLY = """💧 **Groundwater Status Information:**

**🔍 How to Check Groundwater Status:**
• Visit CGWB website: cgwb.gov.in
• Check district-wise groundwater reports
• Contact local CGWB office for latest data

**⚠️ Critical States/Regions:**
• **Punjab**: 76% blocks over-exploited
• **Haryana**: 62% blocks critical/over-exploited
• **Rajasthan**: Western parts critically affected
• **Gujarat**: Coastal areas facing salinity issues

**📊 Understanding Groundwater Categories:**
• **Safe**: <70% extraction of annual recharge
• **Semi-Critical**: 70-90% extraction
• **Critical**: 90-100% extraction
• **Over-Exploited**: >100% extraction

**✅ Sustainable Management:**
• Adopt micro-irrigation (drip/sprinkler)
• Practice crop diversification
• Install rainwater harvesting systems

Which specific area are you interested in knowing about?"""


CONSERVATION_TIPS_REPLY = """🌱 **Water Conservation Tips for Farmers:**

**🚿 Irrigation Efficiency:**
• **Drip Irrigation**: Save 30-50% water, increase yield by 20-25%
• **Sprinkler Systems**: 25-40% water savings vs flood irrigation
• **Timing**: Irrigate early morning or evening to reduce evaporation

**🌾 Crop Management:**
• **Mulching**: Use organic mulch to reduce evaporation
• **Crop Selection**: Choose drought-resistant varieties
• **Crop Rotation**: Include legumes to improve soil water retention

**💧 Water Harvesting:**
• **Farm Ponds**: Store rainwater for dry spells
• **Bunding**: Create field bunds to prevent runoff
• **Recharge Pits**: Allow rainwater to seep into groundwater

**💰 Cost-Effective Methods:**
• **Drip Systems**: ₹25,000-40,000 per acre (55-75% subsidy under PMKSY)
• **Farm Ponds**: Fully funded under MGNREGA
• **Sprinklers**: ₹15,000-25,000 per acre (50-60% subsidy)

Start with one method and gradually expand. Which conservation technique interests you most?"""


BUDGET_PLANNING_REPLY = """## 💛 Budget Analysis
Let me help you with cost-effective solutions for your specific needs!

## 🎯 Smart Budget Approach
• Prioritize essential items first
• Look for government subsidies (can save 50-75%)
• Consider phased implementation to spread costs

## 💰 Cost-Saving Strategies
• **Government Schemes**: PMKSY offers 55-75% subsidy
• **MGNREGA**: 100% funding for water conservation works
• **Bulk Purchase**: Coordinate with neighbors for better rates

## 📋 Budget Planning Steps
1. **Define Requirements**: List exactly what you need
2. **Research Subsidies**: Check eligibility for government schemes
3. **Get Quotes**: Compare prices from multiple vendors
4. **Plan Timeline**: Implement in phases if budget is tight

What specific budget range are you working with?"""


WATER_BUDGET_REPLY = """💰 **Budget-Friendly Water Solutions**

**🏡 Low-Cost Options:**
• **Rainwater Tank**: ₹3,000-8,000 (1000-2000L capacity)
• **Drip Kit**: ₹2,500-5,000 per acre (small scale)
• **Mulch Film**: ₹8,000-12,000 per acre

**🏛️ Government Subsidized:**
• **PMKSY Drip**: Pay only 25-45% of cost
• **MGNREGA Pond**: 100% free under employment scheme

**📋 Budget Planning:**
1. Start with rainwater harvesting (immediate impact)
2. Apply for government schemes (save 50-75%)
3. Implement in phases to spread costs

What's your approximate budget range?"""


BUDGET_GREETING_REPLY = """## 💛 Budget Bro Here!
Ready to help you save money and make smart spending decisions!

## 🎯 What I Can Help With:
• Cost analysis for any purchase or project
• Finding government schemes and subsidies
• Budget planning and cost optimization

Tell me about your specific budget needs!"""


WATER_GREETING_REPLY = """🌊 **INGRES-AI Water Expert**

I can help you with:

**💧 Water Management:**
• Groundwater status and monitoring
• Conservation techniques and methods
• Irrigation system selection and optimization

**🏛️ Government Schemes:**
• PMKSY application process and benefits
• MGNREGA water conservation works
• Subsidy calculations and eligibility

What specific water-related question can I help you with?"""


BUDGET_BACKUP_REPLY = """## 💛 Budget Bro - Emergency Mode!
I'm having connectivity issues, but I'm still here to help with your budget needs!

## 🎯 Quick Budget Guidance
• Focus on essential needs first
• Look for government subsidies and schemes
• Consider local, cost-effective alternatives

Try asking specific budget questions and I'll provide targeted advice!"""


WATER_BACKUP_REPLY = """🌊 **INGRES-AI - Backup Mode Active**

I'm experiencing technical difficulties, but I'm still here to help with water and groundwater questions!

**Quick Resources:**
• Contact your local agriculture department
• Visit CGWB (Central Ground Water Board) website
• Check state water resource department portals

Try rephrasing your question or ask about specific topics like "water schemes," "drip irrigation," or "rainwater harvesting.\""""


def offline_reply(message: str, chat_type: str = "") -> str:

    text = (message or "").lower()
    budget = chat_type == "budget"

    if "scheme" in text and any(k in text for k in ("water", "conservation", "apply")):
        return WATER_SCHEMES_REPLY

    if "rainwater" in text and "harvest" in text:
        return RAINWATER_HARVESTING_REPLY

    if any(k in text for k in ("groundwater", "water level", "punjab", "status")):
        return GROUNDWATER_STATUS_REPLY

    if "conservation" in text and "tips" in text:
        return CONSERVATION_TIPS_REPLY

    if any(k in text for k in ("budget", "cost", "money", "₹")):
        return BUDGET_PLANNING_REPLY if budget else WATER_BUDGET_REPLY

    return BUDGET_GREETING_REPLY if budget else WATER_GREETING_REPLY


def backup_mode_reply(chat_type: str = "") -> str:
    return BUDGET_BACKUP_REPLY if chat_type == "budget" else WATER_BACKUP_REPLY
